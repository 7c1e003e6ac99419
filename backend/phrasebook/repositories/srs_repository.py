"""Repository for per-phrase SRS scheduling state.

Documents live in the SRS container with ``id == phraseId``. The ease factor is
stored as an integer scaled by 100 (250 <-> 2.5); conversion happens only in
``state_to_document`` / ``state_from_document``.
"""

import logging

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceNotFoundError,
)

from phrasebook.db import get_srs_container
from phrasebook.srs.scheduler import (
    SchedulingState,
    apply_rating,
    default_state,
    round_half_up,
    validate_rating,
)
from phrasebook.srs.time import epoch_now

logger = logging.getLogger(__name__)

EASE_FACTOR_SCALE = 100
MAX_UPDATE_ATTEMPTS = 3


class MissingStateError(Exception):
    """Raised when a phrase has no scheduling state."""

    pass


class ConcurrentUpdateError(Exception):
    """Raised when a rating could not be applied because the state kept changing."""

    pass


def state_to_document(phrase_id: str, state: SchedulingState) -> dict:
    return {
        "id": phrase_id,
        "phraseId": phrase_id,
        "easeFactor": round_half_up(state.ease_factor * EASE_FACTOR_SCALE),
        "interval": state.interval_days,
        "repetitions": state.repetitions,
        "nextReviewDate": state.next_review_at,
        "lastReviewDate": state.last_review_at,
        "updatedAt": epoch_now(),
    }


def state_from_document(item: dict) -> SchedulingState:
    return SchedulingState(
        ease_factor=item["easeFactor"] / EASE_FACTOR_SCALE,
        interval_days=item["interval"],
        repetitions=item["repetitions"],
        next_review_at=item["nextReviewDate"],
        last_review_at=item.get("lastReviewDate"),
    )


class SrsRepository:
    """Repository for SRS state database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_srs_container()
        return self._container

    def _query(self, query: str, parameters: list[dict] | None = None) -> list:
        return list(
            self.container.query_items(
                query=query,
                parameters=parameters or [],
                enable_cross_partition_query=True,
            )
        )

    def create_default(self, phrase_id: str, next_review_at: int) -> SchedulingState:
        """Create the initial state for a new phrase, due at ``next_review_at``."""
        state = default_state(next_review_at)
        self.container.create_item(body=state_to_document(phrase_id, state))
        return state

    def _read(self, phrase_id: str) -> dict:
        try:
            return self.container.read_item(item=phrase_id, partition_key=phrase_id)
        except CosmosResourceNotFoundError:
            raise MissingStateError(f"No SRS data found for phrase ID {phrase_id}")

    def get(self, phrase_id: str) -> SchedulingState:
        """Get the scheduling state of a phrase."""
        return state_from_document(self._read(phrase_id))

    def find(self, phrase_id: str) -> SchedulingState | None:
        """Like ``get`` but returns None when the phrase has no state."""
        try:
            return self.get(phrase_id)
        except MissingStateError:
            return None

    def apply_rating(self, phrase_id: str, rating: str, now: int) -> SchedulingState:
        """Apply a rating as one atomic read-modify-write.

        The write is conditioned on the etag that was read, so two concurrent
        ratings cannot both build on the same stale state; the loser re-reads
        and recomputes.

        Raises:
            InvalidRatingError: If the rating is unknown (nothing is written).
            MissingStateError: If the phrase has no scheduling state.
            ConcurrentUpdateError: If every attempt lost the race.
        """
        validate_rating(rating)

        for attempt in range(1, MAX_UPDATE_ATTEMPTS + 1):
            item = self._read(phrase_id)
            new_state = apply_rating(state_from_document(item), rating, now)
            try:
                self.container.replace_item(
                    item=phrase_id,
                    body=state_to_document(phrase_id, new_state),
                    etag=item.get("_etag"),
                    match_condition=MatchConditions.IfNotModified,
                )
                return new_state
            except CosmosAccessConditionFailedError:
                logger.info(
                    "SRS state for phrase %s changed during update (attempt %d/%d)",
                    phrase_id,
                    attempt,
                    MAX_UPDATE_ATTEMPTS,
                )

        raise ConcurrentUpdateError(
            f"SRS state for phrase {phrase_id} was modified concurrently; try again"
        )

    def list_due(self, now: int) -> list[str]:
        """Return ids of phrases due at ``now``, the longest-overdue first."""
        return self._query(
            "SELECT VALUE c.phraseId FROM c WHERE c.nextReviewDate <= @now "
            "ORDER BY c.nextReviewDate ASC",
            [{"name": "@now", "value": now}],
        )

    def count_due(self, now: int) -> int:
        return self._query(
            "SELECT VALUE COUNT(1) FROM c WHERE c.nextReviewDate <= @now",
            [{"name": "@now", "value": now}],
        )[0]

    def list_last_review_dates(self) -> list[int]:
        """Return the last review timestamp of every phrase reviewed at least once."""
        return self._query(
            "SELECT VALUE c.lastReviewDate FROM c "
            "WHERE IS_DEFINED(c.lastReviewDate) AND NOT IS_NULL(c.lastReviewDate)"
        )

    def count_reviewed_since(self, since: int) -> int:
        return self._query(
            "SELECT VALUE COUNT(1) FROM c WHERE c.lastReviewDate >= @since",
            [{"name": "@since", "value": since}],
        )[0]

    def latest_review_date(self) -> int | None:
        items = self._query(
            "SELECT TOP 1 VALUE c.lastReviewDate FROM c "
            "WHERE IS_DEFINED(c.lastReviewDate) AND NOT IS_NULL(c.lastReviewDate) "
            "ORDER BY c.lastReviewDate DESC"
        )
        return items[0] if items else None

    def delete(self, phrase_id: str) -> None:
        """Delete a phrase's state; a phrase without state is not an error."""
        try:
            self.container.delete_item(item=phrase_id, partition_key=phrase_id)
        except CosmosResourceNotFoundError:
            logger.debug("No SRS state to delete for phrase %s", phrase_id)


# Singleton instance
_srs_repository: SrsRepository | None = None


def get_srs_repository() -> SrsRepository:
    """Get the SRS repository singleton."""
    global _srs_repository
    if _srs_repository is None:
        _srs_repository = SrsRepository()
    return _srs_repository
