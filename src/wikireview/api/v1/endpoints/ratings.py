# src/wikireview/api/v1/endpoints/ratings.py
"""Page rating endpoints for the WikiReview API."""

from typing import Annotated

from fastapi import APIRouter, Query

from wikireview.schemas.rating import (
    RatingCreate,
    RatingSubmitResponse,
    RatingSummaryResponse,
)

from ..dependencies import OptionalUserDep, RatingLedgerDep

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("", response_model=RatingSummaryResponse)
async def get_ratings(
    subject_id: Annotated[int, Query(alias="subjectId", description="Wiki page id")],
    ledger: RatingLedgerDep,
    viewer: OptionalUserDep,
    author: Annotated[str | None, Query(description="Rater whose own rating to report")] = None,
) -> RatingSummaryResponse:
    """Return the page's average rating and the caller's own rating."""
    voter = author or (viewer.identity if viewer else None)
    summary = ledger.get_rating_summary(subject_id, voter)
    return RatingSummaryResponse(
        average=summary.average,
        count=summary.count,
        user_rating=summary.user_rating,
    )


@router.post("", response_model=RatingSubmitResponse)
async def submit_rating(
    payload: RatingCreate,
    ledger: RatingLedgerDep,
    viewer: OptionalUserDep,
) -> RatingSubmitResponse:
    """Rate a page from 1 to 5; a repeat submission replaces the earlier one."""
    voter = payload.author or (viewer.identity if viewer else None)
    summary = ledger.submit_rating(
        payload.subject_id,
        payload.subject_label,
        payload.rating,
        voter,
    )
    return RatingSubmitResponse(
        average=summary.average,
        count=summary.count,
        user_rating=summary.user_rating,
    )
