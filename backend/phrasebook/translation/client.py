"""DeepSeek chat-completions client used to translate phrases."""

from __future__ import annotations

import json
import logging
import os
import re
from functools import lru_cache

import httpx
from pydantic import BaseModel

from phrasebook.languages import get_language_name

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class TranslationError(Exception):
    """Raised when the translation service answered without a translation."""

    pass


class TranslationUnavailableError(Exception):
    """Raised when the translation service is not configured or unreachable."""

    pass


class ExpandedPhrase(BaseModel):
    """A sentence built around a phrase plus its translation."""

    expandedPhrase: str
    translation: str


class TranslationSettings(BaseModel):
    """Translation settings loaded from environment variables."""

    api_key: str = ""
    base_url: str = "https://api.deepseek.com/v1"
    model: str = "deepseek-chat"
    timeout_seconds: float = 30.0

    def is_configured(self) -> bool:
        return bool(self.api_key)


@lru_cache()
def get_translation_settings() -> TranslationSettings:
    """Get cached translation settings from environment variables."""
    return TranslationSettings(
        api_key=os.getenv("DEEPSEEK_API_KEY", ""),
        base_url=os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1"),
        model=os.getenv("DEEPSEEK_MODEL", "deepseek-chat"),
        timeout_seconds=float(os.getenv("DEEPSEEK_TIMEOUT_SECONDS", "30")),
    )


def build_messages(phrase: str, source_language: str, target_language: str) -> list[dict]:
    source = get_language_name(source_language)
    target = get_language_name(target_language)
    return [
        {
            "role": "system",
            "content": (
                f"You are a professional translator. Translate the given phrase from "
                f"{source} to {target}. Provide only the translation, no explanations "
                f"or additional text."
            ),
        },
        {"role": "user", "content": phrase},
    ]


def build_expand_messages(phrase: str, language: str, target_language: str) -> list[dict]:
    source = get_language_name(language)
    target = get_language_name(target_language)
    return [
        {
            "role": "system",
            "content": (
                "You are a language learning assistant. Expand the given input text.\n"
                f"1. If the input is a single word or a short phrase, write a natural, common "
                f"sentence using it in {source}.\n"
                f"2. If the input is already a full sentence, write a natural variation of it "
                f"with the same meaning in {source}.\n"
                f"3. Translate the sentence you wrote into {target}.\n\n"
                "Return ONLY a valid JSON object with this structure:\n"
                f'{{"expandedPhrase": "the sentence in {source}", '
                f'"translation": "the translation in {target}"}}'
            ),
        },
        {"role": "user", "content": phrase},
    ]


def parse_expansion(content: str) -> ExpandedPhrase:
    """Parse the model's JSON answer, tolerating prose around the object."""
    try:
        data = json.loads(content)
    except ValueError:
        match = _JSON_OBJECT.search(content)
        if match is None:
            raise TranslationError("Expansion response was not JSON")
        try:
            data = json.loads(match.group(0))
        except ValueError as exc:
            raise TranslationError("Expansion response was not JSON") from exc

    if not isinstance(data, dict):
        raise TranslationError("Incomplete expansion data")
    expanded = data.get("expandedPhrase")
    translation = data.get("translation")
    if not isinstance(expanded, str) or not isinstance(translation, str):
        raise TranslationError("Incomplete expansion data")
    if not expanded.strip() or not translation.strip():
        raise TranslationError("Incomplete expansion data")
    return ExpandedPhrase(expandedPhrase=expanded.strip(), translation=translation.strip())


class TranslationClient:
    """Translates phrases through an OpenAI-compatible chat-completions API."""

    def __init__(
        self,
        settings: TranslationSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or get_translation_settings()
        # Tests inject an httpx.MockTransport here.
        self._transport = transport

    async def _complete(self, payload: dict, service: str) -> str:
        """POST a chat completion and return the first choice's text ("" if absent)."""
        if not self._settings.is_configured():
            raise TranslationUnavailableError(f"{service} service unavailable")

        payload = {"model": self._settings.model, **payload}
        headers = {"Authorization": f"Bearer {self._settings.api_key}"}

        try:
            async with httpx.AsyncClient(
                base_url=self._settings.base_url,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post("/chat/completions", json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s", service, exc)
            raise TranslationUnavailableError(f"{service} service unavailable") from exc

        if response.is_error:
            logger.error(
                "%s API error: status=%s body=%s",
                service,
                response.status_code,
                response.text[:500],
            )
            raise TranslationUnavailableError(
                f"{service} service returned status {response.status_code}"
            )

        try:
            data = response.json()
            return (data["choices"][0]["message"]["content"] or "").strip()
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TranslationError(f"No content returned from {service.lower()} API") from exc

    async def translate(self, phrase: str, source_language: str, target_language: str) -> str:
        """Return the translation of ``phrase``.

        Raises:
            TranslationUnavailableError: No API key, network failure or error status.
            TranslationError: The response carried no translation.
        """
        translation = await self._complete(
            {
                "messages": build_messages(phrase, source_language, target_language),
                "temperature": 0.3,
                "max_tokens": 500,
            },
            "Translation",
        )
        if not translation:
            raise TranslationError("No translation returned from API")
        return translation

    async def expand(self, phrase: str, language: str, target_language: str) -> ExpandedPhrase:
        """Build a sentence around ``phrase`` in ``language`` and translate it.

        Raises the same errors as :meth:`translate`; a missing or malformed JSON
        answer is a ``TranslationError``.
        """
        content = await self._complete(
            {
                "messages": build_expand_messages(phrase, language, target_language),
                "temperature": 0.7,
                "max_tokens": 500,
                "response_format": {"type": "json_object"},
            },
            "Expansion",
        )
        if not content:
            raise TranslationError("No content returned from API")
        return parse_expansion(content)


def get_translation_client() -> TranslationClient:
    return TranslationClient()
