"""Comment tree store.

Comments are stored as flat rows with an optional ``parent_comment_id``.
Reads rebuild the reply forest in one pass over the rows for a page:

1. fetch every row for the page in creation order,
2. index a node per row by comment id,
3. append each node to its parent's replies by id lookup, or to the roots.

Sibling order is creation order at every level. The pass is iterative, so
reply depth is limited only by the rows, never by the interpreter stack.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import case, func, select

from wikireview.core.errors import ForbiddenError, NotFoundError, ValidationError
from wikireview.core.settings import settings
from wikireview.models.comment import Comment, CommentVote

from .base import StoreService

__all__ = ["CommentNode", "CommentTreeStore", "build_comment_forest"]

logger = logging.getLogger(__name__)


@dataclass
class CommentNode:
    """A comment with its vote aggregates and nested replies."""

    id: int
    subject_id: int
    subject_label: str
    body: str
    author_name: str
    parent_comment_id: int | None
    created_at: datetime
    upvotes: int = 0
    downvotes: int = 0
    user_vote: int | None = None
    replies: list[CommentNode] = field(default_factory=list)


@dataclass(frozen=True)
class VoteTally:
    upvotes: int = 0
    downvotes: int = 0


def build_comment_forest(
    rows: Sequence[Comment],
    tallies: Mapping[int, VoteTally] | None = None,
    viewer_votes: Mapping[int, int] | None = None,
) -> list[CommentNode]:
    """Rebuild the reply forest from flat rows already sorted by creation time.

    Rows whose parent is not among ``rows`` are dropped rather than promoted
    to roots.
    """
    tallies = tallies or {}
    viewer_votes = viewer_votes or {}

    nodes: dict[int, CommentNode] = {}
    for row in rows:
        tally = tallies.get(row.id, VoteTally())
        nodes[row.id] = CommentNode(
            id=row.id,
            subject_id=row.subject_id,
            subject_label=row.subject_label,
            body=row.body,
            author_name=row.author_name,
            parent_comment_id=row.parent_comment_id,
            created_at=row.created_at,
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
            user_vote=viewer_votes.get(row.id),
        )

    roots: list[CommentNode] = []
    for row in rows:
        node = nodes[row.id]
        if row.parent_comment_id is None:
            roots.append(node)
        elif row.parent_comment_id in nodes:
            nodes[row.parent_comment_id].replies.append(node)
    return roots


class CommentTreeStore(StoreService):
    """Persists comments and reads them back as reply trees."""

    def get_comment(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier."""
        return self.db.get(Comment, comment_id)

    def _tally_votes(self, comment_ids: Iterable[int]) -> dict[int, VoteTally]:
        ids = list(comment_ids)
        if not ids:
            return {}
        stmt = (
            select(
                CommentVote.comment_id,
                func.sum(case((CommentVote.value == 1, 1), else_=0)),
                func.sum(case((CommentVote.value == -1, 1), else_=0)),
            )
            .where(CommentVote.comment_id.in_(ids))
            .group_by(CommentVote.comment_id)
        )
        return {
            comment_id: VoteTally(upvotes=int(up or 0), downvotes=int(down or 0))
            for comment_id, up, down in self.db.execute(stmt)
        }

    def _viewer_votes(self, comment_ids: Iterable[int], viewer: str | None) -> dict[int, int]:
        ids = list(comment_ids)
        if not viewer or not ids:
            return {}
        stmt = select(CommentVote.comment_id, CommentVote.value).where(
            CommentVote.comment_id.in_(ids),
            CommentVote.voter == viewer,
        )
        return {comment_id: value for comment_id, value in self.db.execute(stmt)}

    def list_comments_for_subject(
        self,
        subject_id: int,
        viewer: str | None = None,
    ) -> list[CommentNode]:
        """Return the comment forest for a page.

        Args:
            subject_id: Wiki page identifier.
            viewer: Identity whose own votes should be reported in ``user_vote``.
        """
        rows = list(
            self.db.scalars(
                select(Comment)
                .where(Comment.subject_id == subject_id)
                .order_by(Comment.created_at.asc(), Comment.id.asc())
            )
        )
        ids = [row.id for row in rows]
        return build_comment_forest(
            rows,
            tallies=self._tally_votes(ids),
            viewer_votes=self._viewer_votes(ids, viewer),
        )

    def add_comment(
        self,
        subject_id: int,
        subject_label: str | None,
        body: str,
        author_name: str | None = None,
        parent_comment_id: int | None = None,
    ) -> Comment:
        """Create a comment or a reply.

        Raises:
            ValidationError: If the body is blank or the parent is on another page.
            NotFoundError: If ``parent_comment_id`` does not exist.
        """
        text = (body or "").strip()
        if not text:
            raise ValidationError("Comment text is required")

        if parent_comment_id is not None:
            parent = self.get_comment(parent_comment_id)
            if parent is None:
                raise NotFoundError("Parent comment not found")
            if parent.subject_id != subject_id:
                raise ValidationError("Parent comment does not belong to this page")

        comment = Comment(
            subject_id=subject_id,
            subject_label=(subject_label or "").strip() or f"Page {subject_id}",
            body=text,
            author_name=(author_name or "").strip() or settings.anonymous_author,
            parent_comment_id=parent_comment_id,
        )
        self.db.add(comment)
        self._commit("create comment")
        self.db.refresh(comment)
        logger.info(
            "Created comment %s on page %s (parent=%s)",
            comment.id,
            subject_id,
            parent_comment_id,
        )
        return comment

    def delete_comment(self, comment_id: int, requester: str | None) -> None:
        """Delete a comment together with its whole reply subtree and votes.

        Raises:
            NotFoundError: If the comment does not exist.
            ForbiddenError: If ``requester`` is not the comment's author.
        """
        comment = self.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if not requester or requester != comment.author_name:
            raise ForbiddenError("Only the author may delete this comment")
        self.db.delete(comment)
        self._commit("delete comment")
        logger.info("Deleted comment %s and its replies", comment_id)
