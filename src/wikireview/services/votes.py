"""Vote ledger for comments.

Each (comment, voter) pair holds at most one row. Voting toggles:

- no prior vote: insert it,
- prior vote with the same value: delete it (un-vote),
- prior vote with the opposite value: flip it in place.

Up/down totals are always recounted from the rows, never cached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from wikireview.core.errors import NotFoundError, UnauthenticatedError, ValidationError
from wikireview.models.comment import Comment, CommentVote

from .base import StoreService

__all__ = ["VoteLedger", "VoteSummary"]

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1


@dataclass(frozen=True)
class VoteSummary:
    """Totals for a comment plus the caller's current vote, if any."""

    upvotes: int
    downvotes: int
    voter_value: int | None


class VoteLedger(StoreService):
    """Records and aggregates up/down votes on comments."""

    def _get_vote(self, comment_id: int, voter: str) -> CommentVote | None:
        return self.db.scalars(
            select(CommentVote).where(
                CommentVote.comment_id == comment_id,
                CommentVote.voter == voter,
            )
        ).first()

    def _count(self, comment_id: int, value: int) -> int:
        return self.db.scalar(
            select(func.count())
            .select_from(CommentVote)
            .where(CommentVote.comment_id == comment_id, CommentVote.value == value)
        ) or 0

    def get_vote_summary(self, comment_id: int, voter: str | None = None) -> VoteSummary:
        """Return the current totals for ``comment_id``."""
        vote = self._get_vote(comment_id, voter) if voter else None
        return VoteSummary(
            upvotes=self._count(comment_id, UPVOTE),
            downvotes=self._count(comment_id, DOWNVOTE),
            voter_value=vote.value if vote else None,
        )

    def _insert_vote(self, comment_id: int, voter: str, value: int) -> None:
        try:
            with self.db.begin_nested():
                self.db.add(CommentVote(comment_id=comment_id, voter=voter, value=value))
        except IntegrityError:
            # A concurrent request inserted the row first; overwrite it instead.
            logger.warning(
                "Vote race on comment %s for %s; updating existing row",
                comment_id,
                voter,
            )
            existing = self._get_vote(comment_id, voter)
            if existing is None:
                raise
            existing.value = value

    def cast_vote(self, comment_id: int, voter: str | None, value: int) -> VoteSummary:
        """Apply a toggle vote and return the recomputed totals.

        Raises:
            UnauthenticatedError: If no voter identity was resolved.
            ValidationError: If ``value`` is not 1 or -1.
            NotFoundError: If the comment does not exist.
        """
        if not voter:
            raise UnauthenticatedError("You must be logged in to vote")
        if value not in (UPVOTE, DOWNVOTE):
            raise ValidationError("Vote must be 1 (upvote) or -1 (downvote)")
        if self.db.get(Comment, comment_id) is None:
            raise NotFoundError("Comment not found")

        existing = self._get_vote(comment_id, voter)
        if existing is None:
            self._insert_vote(comment_id, voter, value)
        elif existing.value == value:
            self.db.delete(existing)
        else:
            existing.value = value
        self._commit("record vote")

        return self.get_vote_summary(comment_id, voter)
