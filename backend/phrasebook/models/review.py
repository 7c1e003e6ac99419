"""Review and stats models."""

from pydantic import BaseModel, Field

from phrasebook.models.phrase import PhraseResponse, SrsSummary


class RatingRequest(BaseModel):
    """Rating submitted for a reviewed phrase.

    ``rating`` accepts any JSON scalar and is validated by the scheduler rather
    than here, so an unknown value of any type surfaces as InvalidRatingError
    (HTTP 400). Only a missing rating or a non-scalar one is a 422.
    """

    phraseId: str = Field(..., min_length=1)
    rating: str | int | float | bool | None = Field(..., description="again, hard, good or easy")


class RatingResponse(BaseModel):
    success: bool = True
    phraseId: str
    srs: SrsSummary


class DueCardsResponse(BaseModel):
    cards: list[PhraseResponse]
    count: int


class ReviewStatsResponse(BaseModel):
    totalCards: int
    cardsDueToday: int
    cardsReviewedToday: int
    streak: int
    lastReviewDate: str | None = Field(None, description="Most recent review (UTC ISO Z)")
