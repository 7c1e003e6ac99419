"""Languages offered for translation."""

LANGUAGES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}


def get_language_name(code: str) -> str:
    """Return the English name for a language code, or the code itself if unknown."""
    return LANGUAGES.get(code, code)


def is_supported(code: str) -> bool:
    return code in LANGUAGES


def language_pair_tag(source_language: str, target_language: str) -> str:
    return f"{source_language}-{target_language}"
