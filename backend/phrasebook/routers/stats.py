"""Review statistics router."""

from fastapi import APIRouter

from phrasebook.config import get_app_settings
from phrasebook.models import ReviewStatsResponse
from phrasebook.repositories import get_phrase_repository, get_srs_repository
from phrasebook.srs.streak import calculate_streak
from phrasebook.srs.time import epoch_now, epoch_to_iso_z, start_of_day

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/review", response_model=ReviewStatsResponse)
def review_stats() -> ReviewStatsResponse:
    """Dashboard counters and the current review streak."""
    now = epoch_now()
    tz = get_app_settings().review_tz
    srs_repo = get_srs_repository()

    last_review = srs_repo.latest_review_date()
    return ReviewStatsResponse(
        totalCards=get_phrase_repository().count(),
        cardsDueToday=srs_repo.count_due(now),
        cardsReviewedToday=srs_repo.count_reviewed_since(start_of_day(now, tz)),
        streak=calculate_streak(srs_repo.list_last_review_dates(), now, tz),
        lastReviewDate=epoch_to_iso_z(last_review) if last_review is not None else None,
    )
