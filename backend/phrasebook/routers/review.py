"""Review (SRS) API router."""

import logging

from fastapi import APIRouter, HTTPException, status

from phrasebook.models import (
    DueCardsResponse,
    RatingRequest,
    RatingResponse,
    SrsSummary,
)
from phrasebook.repositories import (
    ConcurrentUpdateError,
    MissingStateError,
    get_phrase_repository,
    get_srs_repository,
)
from phrasebook.routers.phrases import to_response
from phrasebook.srs.scheduler import InvalidRatingError
from phrasebook.srs.time import epoch_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/review", tags=["review"])


@router.get("/due-cards", response_model=DueCardsResponse)
def due_cards() -> DueCardsResponse:
    """Return the phrases due for review now, the longest-overdue first."""
    due_ids = get_srs_repository().list_due(epoch_now())
    phrases = get_phrase_repository().get_many(due_ids)
    return DueCardsResponse(cards=[to_response(phrase) for phrase in phrases], count=len(phrases))


@router.post("/update-rating", response_model=RatingResponse)
def update_rating(request: RatingRequest) -> RatingResponse:
    """Apply a recall rating to a phrase and reschedule it."""
    try:
        state = get_srs_repository().apply_rating(request.phraseId, request.rating, epoch_now())
    except InvalidRatingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except MissingStateError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ConcurrentUpdateError as exc:
        logger.warning("Rating for phrase %s not applied: %s", request.phraseId, exc)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    logger.info(
        "Rating applied: phrase=%s rating=%s interval=%d ef=%.2f reps=%d",
        request.phraseId,
        request.rating,
        state.interval_days,
        state.ease_factor,
        state.repetitions,
    )
    return RatingResponse(phraseId=request.phraseId, srs=SrsSummary.from_state(state))
