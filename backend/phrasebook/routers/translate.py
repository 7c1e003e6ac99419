"""Translation router."""

import logging

from fastapi import APIRouter, HTTPException, status

from phrasebook.languages import LANGUAGES, is_supported
from phrasebook.models import (
    ExpandRequest,
    ExpandResponse,
    LanguageInfo,
    LanguageListResponse,
    TranslateRequest,
    TranslateResponse,
)
from phrasebook.translation import (
    TranslationError,
    TranslationUnavailableError,
    get_translation_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["translate"])


@router.get("/languages", response_model=LanguageListResponse)
def list_languages() -> LanguageListResponse:
    return LanguageListResponse(
        languages=[LanguageInfo(code=code, name=name) for code, name in LANGUAGES.items()]
    )


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest) -> TranslateResponse:
    """Translate a phrase with the configured LLM."""
    for code in (request.sourceLanguage, request.targetLanguage):
        if not is_supported(code):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported language: {code}",
            )

    client = get_translation_client()
    try:
        translation = await client.translate(
            request.phrase, request.sourceLanguage, request.targetLanguage
        )
    except TranslationUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Translation service unavailable",
        )
    except TranslationError as exc:
        logger.error("Translation failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="No translation returned",
        )
    return TranslateResponse(translation=translation)


@router.post("/expand", response_model=ExpandResponse)
async def expand(request: ExpandRequest) -> ExpandResponse:
    """Turn a word or phrase into a full example sentence and translate it."""
    for code in (request.language, request.targetLanguage):
        if not is_supported(code):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported language: {code}",
            )

    client = get_translation_client()
    try:
        result = await client.expand(request.phrase, request.language, request.targetLanguage)
    except TranslationUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Expansion service unavailable",
        )
    except TranslationError as exc:
        logger.error("Expansion failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Incomplete expansion data",
        )
    return ExpandResponse(expandedPhrase=result.expandedPhrase, translation=result.translation)
