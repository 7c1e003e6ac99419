"""Tags API router."""

from fastapi import APIRouter

from phrasebook.models import TagListResponse, TagPhrasesResponse, TagSummary
from phrasebook.repositories import get_phrase_repository
from phrasebook.routers.phrases import to_response

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagListResponse)
def list_tags() -> TagListResponse:
    """List every tag in use with the number of phrases carrying it."""
    tags = [TagSummary(name=name, count=count) for name, count in get_phrase_repository().list_tags()]
    return TagListResponse(tags=tags, count=len(tags))


@router.get("/{tag_name}/phrases", response_model=TagPhrasesResponse)
def list_tag_phrases(tag_name: str) -> TagPhrasesResponse:
    phrases = get_phrase_repository().list_by_tag(tag_name)
    return TagPhrasesResponse(
        tag=tag_name,
        phrases=[to_response(phrase) for phrase in phrases],
        count=len(phrases),
    )
