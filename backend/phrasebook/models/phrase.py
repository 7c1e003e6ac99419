"""Phrase models for API requests and responses."""

from pydantic import BaseModel, Field, computed_field, field_validator
from uuid import uuid4

from phrasebook.languages import language_pair_tag
from phrasebook.srs.scheduler import SchedulingState
from phrasebook.srs.time import epoch_now


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def _clean_tag_names(names: list[str]) -> list[str]:
    """Trim tag names, drop blanks and keep the first occurrence of each."""
    cleaned: list[str] = []
    for name in names:
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


class PhraseBase(BaseModel):
    """Base phrase model with common fields."""

    sourcePhrase: str = Field(..., min_length=1, max_length=2000, description="Phrase in the source language")
    translation: str = Field(..., min_length=1, max_length=2000, description="Translated phrase")
    sourceLanguage: str = Field(..., min_length=1, max_length=10, description="Source language code")
    targetLanguage: str = Field(..., min_length=1, max_length=10, description="Target language code")


class PhraseCreate(PhraseBase):
    """Model for saving a translated phrase."""

    pass


class PhraseTagsUpdate(BaseModel):
    """Replace the full tag list of a phrase."""

    tags: list[str] = Field(default_factory=list, description="Tag names")

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str]) -> list[str]:
        return _clean_tag_names(value)


class Phrase(PhraseBase):
    """Full phrase model as stored in the database."""

    id: str = Field(default_factory=generate_uuid, description="Unique identifier")
    tags: list[str] = Field(default_factory=list, description="Tag names")
    createdAt: int = Field(default_factory=epoch_now, description="Creation timestamp (epoch seconds)")
    updatedAt: int = Field(default_factory=epoch_now, description="Last update timestamp (epoch seconds)")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def languagePair(self) -> str:
        return language_pair_tag(self.sourceLanguage, self.targetLanguage)

    def to_document(self) -> dict:
        """Serialize for storage (derived fields are not persisted)."""
        return self.model_dump(exclude={"languagePair"})

    @classmethod
    def from_document(cls, item: dict) -> "Phrase":
        fields = {key: value for key, value in item.items() if not key.startswith("_")}
        fields.pop("languagePair", None)
        return cls(**fields)


class PhraseResponse(PhraseBase):
    """Phrase response model returned by API."""

    id: str
    tags: list[str]
    createdAt: int
    languagePair: str


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int


class PhraseListResponse(BaseModel):
    """A page of phrases."""

    phrases: list[PhraseResponse]
    pagination: Pagination


class PhraseCreatedResponse(BaseModel):
    message: str
    phraseId: str


class SrsSummary(BaseModel):
    """Scheduling state as exposed to clients (ease factor as a decimal)."""

    nextReviewDate: int
    lastReviewDate: int | None
    interval: int
    easeFactor: float
    repetitions: int

    @classmethod
    def from_state(cls, state: SchedulingState) -> "SrsSummary":
        return cls(
            nextReviewDate=state.next_review_at,
            lastReviewDate=state.last_review_at,
            interval=state.interval_days,
            easeFactor=state.ease_factor,
            repetitions=state.repetitions,
        )


class PhraseDetail(PhraseResponse):
    srs: SrsSummary | None = None


class PhraseDetailResponse(BaseModel):
    phrase: PhraseDetail


class PhraseTagsResponse(BaseModel):
    message: str
    phraseId: str
    tags: list[str]


class TagSummary(BaseModel):
    name: str
    count: int


class TagListResponse(BaseModel):
    tags: list[TagSummary]
    count: int


class TagPhrasesResponse(BaseModel):
    tag: str
    phrases: list[PhraseResponse]
    count: int
