"""Repository for Phrase CRUD operations and tagging."""

import logging
from collections import Counter

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from phrasebook.db import get_phrases_container
from phrasebook.languages import language_pair_tag
from phrasebook.models import Phrase, PhraseCreate
from phrasebook.srs.time import epoch_now

logger = logging.getLogger(__name__)


class PhraseNotFoundError(Exception):
    """Raised when a phrase is not found."""

    pass


class DuplicatePhraseError(Exception):
    """Raised when the same phrase is saved twice for one language pair."""

    pass


class PhraseRepository:
    """Repository for Phrase database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_phrases_container()
        return self._container

    def _query(self, query: str, parameters: list[dict] | None = None) -> list:
        return list(
            self.container.query_items(
                query=query,
                parameters=parameters or [],
                enable_cross_partition_query=True,
            )
        )

    def list_page(self, page: int, limit: int) -> list[Phrase]:
        """List phrases newest first, ``limit`` per page (pages start at 1)."""
        query = "SELECT * FROM c ORDER BY c.createdAt DESC OFFSET @offset LIMIT @limit"
        parameters = [
            {"name": "@offset", "value": (page - 1) * limit},
            {"name": "@limit", "value": limit},
        ]
        return [Phrase.from_document(item) for item in self._query(query, parameters)]

    def list_all(self) -> list[Phrase]:
        return [
            Phrase.from_document(item)
            for item in self._query("SELECT * FROM c ORDER BY c.createdAt DESC")
        ]

    def count(self) -> int:
        return self._query("SELECT VALUE COUNT(1) FROM c")[0]

    def get_by_id(self, phrase_id: str) -> Phrase:
        """Get a phrase by ID."""
        try:
            item = self.container.read_item(item=phrase_id, partition_key=phrase_id)
            return Phrase.from_document(item)
        except CosmosResourceNotFoundError:
            raise PhraseNotFoundError(f"Phrase with ID {phrase_id} not found")

    def get_many(self, phrase_ids: list[str]) -> list[Phrase]:
        """Fetch phrases by ID, preserving the order of ``phrase_ids``.

        IDs without a phrase are skipped.
        """
        if not phrase_ids:
            return []
        items = self._query(
            "SELECT * FROM c WHERE ARRAY_CONTAINS(@ids, c.id)",
            [{"name": "@ids", "value": phrase_ids}],
        )
        by_id = {item["id"]: Phrase.from_document(item) for item in items}
        return [by_id[phrase_id] for phrase_id in phrase_ids if phrase_id in by_id]

    def find_duplicate(
        self, source_phrase: str, source_language: str, target_language: str
    ) -> Phrase | None:
        query = (
            "SELECT TOP 1 * FROM c WHERE c.sourcePhrase = @sourcePhrase "
            "AND c.sourceLanguage = @sourceLanguage AND c.targetLanguage = @targetLanguage"
        )
        parameters = [
            {"name": "@sourcePhrase", "value": source_phrase},
            {"name": "@sourceLanguage", "value": source_language},
            {"name": "@targetLanguage", "value": target_language},
        ]
        items = self._query(query, parameters)
        return Phrase.from_document(items[0]) if items else None

    def create(self, phrase_create: PhraseCreate) -> Phrase:
        """Save a new phrase tagged with its language pair (e.g. "en-es")."""
        if self.find_duplicate(
            phrase_create.sourcePhrase,
            phrase_create.sourceLanguage,
            phrase_create.targetLanguage,
        ):
            raise DuplicatePhraseError("Phrase already saved with this language pair")

        phrase = Phrase(
            **phrase_create.model_dump(),
            tags=[language_pair_tag(phrase_create.sourceLanguage, phrase_create.targetLanguage)],
        )
        created_item = self.container.create_item(body=phrase.to_document())
        return Phrase.from_document(created_item)

    def _save(self, phrase: Phrase) -> Phrase:
        phrase.updatedAt = epoch_now()
        updated_item = self.container.replace_item(item=phrase.id, body=phrase.to_document())
        return Phrase.from_document(updated_item)

    def set_tags(self, phrase_id: str, tag_names: list[str]) -> Phrase:
        """Replace the tags of a phrase with ``tag_names``."""
        phrase = self.get_by_id(phrase_id)
        added = [name for name in tag_names if name not in phrase.tags]
        removed = [name for name in phrase.tags if name not in tag_names]
        if not added and not removed:
            return phrase
        logger.info("Retagging phrase %s: +%s -%s", phrase_id, added, removed)
        phrase.tags = list(tag_names)
        return self._save(phrase)

    def remove_tag(self, phrase_id: str, tag_name: str) -> Phrase:
        phrase = self.get_by_id(phrase_id)
        if tag_name not in phrase.tags:
            return phrase
        phrase.tags = [name for name in phrase.tags if name != tag_name]
        return self._save(phrase)

    def list_by_tag(self, tag_name: str) -> list[Phrase]:
        query = "SELECT * FROM c WHERE ARRAY_CONTAINS(c.tags, @tag) ORDER BY c.createdAt DESC"
        return [
            Phrase.from_document(item)
            for item in self._query(query, [{"name": "@tag", "value": tag_name}])
        ]

    def list_tags(self) -> list[tuple[str, int]]:
        """Return (tag name, phrase count) pairs sorted by name."""
        names = self._query("SELECT VALUE t FROM c JOIN t IN c.tags")
        return sorted(Counter(names).items())

    def delete(self, phrase_id: str) -> None:
        """Delete a phrase by ID."""
        try:
            self.container.delete_item(item=phrase_id, partition_key=phrase_id)
        except CosmosResourceNotFoundError:
            raise PhraseNotFoundError(f"Phrase with ID {phrase_id} not found")


# Singleton instance
_phrase_repository: PhraseRepository | None = None


def get_phrase_repository() -> PhraseRepository:
    """Get the phrase repository singleton."""
    global _phrase_repository
    if _phrase_repository is None:
        _phrase_repository = PhraseRepository()
    return _phrase_repository
