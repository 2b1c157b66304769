"""Rating ledger for wiki pages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from wikireview.core.errors import ValidationError
from wikireview.core.settings import settings
from wikireview.models.rating import Rating

from .base import StoreService

__all__ = ["RatingLedger", "RatingSummary", "round_average"]

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class RatingSummary:
    """Average and count for a page plus the caller's own rating."""

    average: float
    count: int
    user_rating: int | None


def round_average(total: int, count: int) -> float:
    """Return ``total / count`` rounded half-up to one decimal place, or 0.0 when empty."""
    if count == 0:
        return 0.0
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _validate_rating(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Rating must be a whole number between 1 and 5")
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError("Rating must be between 1 and 5")
    return value


class RatingLedger(StoreService):
    """Upserts one rating per (page, rater) and derives the page average."""

    def _get_rating(self, subject_id: int, voter: str) -> Rating | None:
        return self.db.scalars(
            select(Rating).where(Rating.subject_id == subject_id, Rating.voter == voter)
        ).first()

    def get_rating_summary(self, subject_id: int, voter: str | None = None) -> RatingSummary:
        """Return the rounded average, the count and ``voter``'s rating."""
        count, total = self.db.execute(
            select(func.count(Rating.id), func.coalesce(func.sum(Rating.value), 0)).where(
                Rating.subject_id == subject_id
            )
        ).one()
        own = self._get_rating(subject_id, voter) if voter else None
        return RatingSummary(
            average=round_average(int(total), int(count)),
            count=int(count),
            user_rating=own.value if own else None,
        )

    def submit_rating(
        self,
        subject_id: int,
        subject_label: str | None,
        value: int,
        voter: str | None = None,
    ) -> RatingSummary:
        """Insert or overwrite the caller's rating and return the new summary.

        Unauthenticated callers all share the anonymous author slot.

        Raises:
            ValidationError: If ``value`` is not an integer from 1 to 5.
        """
        value = _validate_rating(value)
        voter = (voter or "").strip() or settings.anonymous_author
        label = (subject_label or "").strip() or f"Page {subject_id}"

        existing = self._get_rating(subject_id, voter)
        if existing is not None:
            existing.value = value
        else:
            try:
                with self.db.begin_nested():
                    self.db.add(
                        Rating(
                            subject_id=subject_id,
                            subject_label=label,
                            value=value,
                            voter=voter,
                        )
                    )
            except IntegrityError:
                logger.warning(
                    "Rating race on page %s for %s; updating existing row",
                    subject_id,
                    voter,
                )
                existing = self._get_rating(subject_id, voter)
                if existing is None:
                    raise
                existing.value = value
        self._commit("record rating")

        return self.get_rating_summary(subject_id, voter)
