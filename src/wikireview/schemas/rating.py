"""Rating-related Pydantic schemas."""

from pydantic import Field

from .common import CamelModel


class RatingCreate(CamelModel):
    """Schema for rating a wiki page."""

    subject_id: int
    subject_label: str | None = None
    rating: int = Field(..., description="Whole stars from 1 to 5")
    author: str | None = Field(None, description="Rater name; defaults to the session user")


class RatingSummaryResponse(CamelModel):
    average: float
    count: int
    user_rating: int | None = None


class RatingSubmitResponse(RatingSummaryResponse):
    success: bool = True
