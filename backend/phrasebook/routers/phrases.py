"""Phrases API router."""

import logging
import math

from fastapi import APIRouter, HTTPException, Query, status

from phrasebook.models import (
    Pagination,
    Phrase,
    PhraseCreate,
    PhraseCreatedResponse,
    PhraseDetail,
    PhraseDetailResponse,
    PhraseListResponse,
    PhraseResponse,
    PhraseTagsResponse,
    PhraseTagsUpdate,
    SrsSummary,
)
from phrasebook.repositories import (
    DuplicatePhraseError,
    PhraseNotFoundError,
    get_phrase_repository,
    get_srs_repository,
)
from phrasebook.srs.time import epoch_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/phrases", tags=["phrases"])


def to_response(phrase: Phrase) -> PhraseResponse:
    return PhraseResponse(**phrase.model_dump())


def _not_found(phrase_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Phrase with ID {phrase_id} not found",
    )


@router.post("", response_model=PhraseCreatedResponse, status_code=status.HTTP_201_CREATED)
def save_phrase(phrase_create: PhraseCreate) -> PhraseCreatedResponse:
    """Save a translated phrase and schedule it for review right away."""
    repo = get_phrase_repository()
    try:
        phrase = repo.create(phrase_create)
    except DuplicatePhraseError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    try:
        get_srs_repository().create_default(phrase.id, next_review_at=epoch_now())
    except Exception:
        # A phrase without a schedule can never come due; undo the save.
        logger.exception("Could not schedule phrase %s; removing it", phrase.id)
        repo.delete(phrase.id)
        raise
    logger.info("Saved phrase %s (%s)", phrase.id, phrase.languagePair)
    return PhraseCreatedResponse(message="Phrase saved successfully", phraseId=phrase.id)


@router.get("", response_model=PhraseListResponse)
def list_phrases(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> PhraseListResponse:
    """List saved phrases, newest first."""
    repo = get_phrase_repository()
    phrases = repo.list_page(page, limit)
    total = repo.count()
    return PhraseListResponse(
        phrases=[to_response(phrase) for phrase in phrases],
        pagination=Pagination(
            currentPage=page,
            totalPages=math.ceil(total / limit),
            totalItems=total,
            itemsPerPage=limit,
        ),
    )


@router.get("/{phrase_id}", response_model=PhraseDetailResponse)
def get_phrase(phrase_id: str) -> PhraseDetailResponse:
    """Get a phrase with its tags and review schedule."""
    try:
        phrase = get_phrase_repository().get_by_id(phrase_id)
    except PhraseNotFoundError:
        raise _not_found(phrase_id)

    state = get_srs_repository().find(phrase_id)
    return PhraseDetailResponse(
        phrase=PhraseDetail(
            **phrase.model_dump(),
            srs=SrsSummary.from_state(state) if state is not None else None,
        )
    )


@router.delete("/{phrase_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_phrase(phrase_id: str) -> None:
    """Delete a phrase together with its review schedule."""
    try:
        get_phrase_repository().delete(phrase_id)
    except PhraseNotFoundError:
        raise _not_found(phrase_id)
    get_srs_repository().delete(phrase_id)
    logger.info("Deleted phrase %s", phrase_id)


@router.put("/{phrase_id}/tags", response_model=PhraseTagsResponse)
def update_tags(phrase_id: str, tags_update: PhraseTagsUpdate) -> PhraseTagsResponse:
    """Replace the tags on a phrase."""
    try:
        phrase = get_phrase_repository().set_tags(phrase_id, tags_update.tags)
    except PhraseNotFoundError:
        raise _not_found(phrase_id)
    return PhraseTagsResponse(message="Tags updated successfully", phraseId=phrase.id, tags=phrase.tags)


@router.delete("/{phrase_id}/tags/{tag_name}", response_model=PhraseTagsResponse)
def remove_tag(phrase_id: str, tag_name: str) -> PhraseTagsResponse:
    """Remove a single tag from a phrase."""
    try:
        phrase = get_phrase_repository().remove_tag(phrase_id, tag_name)
    except PhraseNotFoundError:
        raise _not_found(phrase_id)
    return PhraseTagsResponse(message="Tag removed successfully", phraseId=phrase.id, tags=phrase.tags)
