"""Repositories module for data access layer."""

from .phrase_repository import (
    DuplicatePhraseError,
    PhraseNotFoundError,
    PhraseRepository,
    get_phrase_repository,
)
from .srs_repository import (
    ConcurrentUpdateError,
    MissingStateError,
    SrsRepository,
    get_srs_repository,
)

__all__ = [
    "DuplicatePhraseError",
    "PhraseNotFoundError",
    "PhraseRepository",
    "get_phrase_repository",
    "ConcurrentUpdateError",
    "MissingStateError",
    "SrsRepository",
    "get_srs_repository",
]
