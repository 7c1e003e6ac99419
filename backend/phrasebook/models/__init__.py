"""Models module for Pydantic schemas."""

from .phrase import (
    Pagination,
    Phrase,
    PhraseBase,
    PhraseCreate,
    PhraseCreatedResponse,
    PhraseDetail,
    PhraseDetailResponse,
    PhraseListResponse,
    PhraseResponse,
    PhraseTagsResponse,
    PhraseTagsUpdate,
    SrsSummary,
    TagListResponse,
    TagPhrasesResponse,
    TagSummary,
)
from .review import (
    DueCardsResponse,
    RatingRequest,
    RatingResponse,
    ReviewStatsResponse,
)
from .translate import (
    ExpandRequest,
    ExpandResponse,
    LanguageInfo,
    LanguageListResponse,
    TranslateRequest,
    TranslateResponse,
)

__all__ = [
    "Pagination",
    "Phrase",
    "PhraseBase",
    "PhraseCreate",
    "PhraseCreatedResponse",
    "PhraseDetail",
    "PhraseDetailResponse",
    "PhraseListResponse",
    "PhraseResponse",
    "PhraseTagsResponse",
    "PhraseTagsUpdate",
    "SrsSummary",
    "TagListResponse",
    "TagPhrasesResponse",
    "TagSummary",
    "DueCardsResponse",
    "RatingRequest",
    "RatingResponse",
    "ReviewStatsResponse",
    "ExpandRequest",
    "ExpandResponse",
    "LanguageInfo",
    "LanguageListResponse",
    "TranslateRequest",
    "TranslateResponse",
]
