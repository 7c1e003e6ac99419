"""LLM-backed phrase translation."""

from .client import (
    ExpandedPhrase,
    TranslationClient,
    TranslationError,
    TranslationSettings,
    TranslationUnavailableError,
    get_translation_client,
    get_translation_settings,
)

__all__ = [
    "ExpandedPhrase",
    "TranslationClient",
    "TranslationError",
    "TranslationSettings",
    "TranslationUnavailableError",
    "get_translation_client",
    "get_translation_settings",
]
