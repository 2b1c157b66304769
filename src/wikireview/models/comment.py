# src/wikireview/models/comment.py
"""Models for threaded comments and the votes cast on them."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wikireview.db.session import Base
from wikireview.db.time import utcnow


class Comment(Base):
    """A comment on a wiki page.

    Replies point at their parent through ``parent_comment_id``; the nested
    tree is rebuilt at read time, never stored.
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_subject_created", "subject_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    subject_label: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    author_name: Mapped[str] = mapped_column(Text, nullable=False, default="Anonymous")
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Used for cascading deletes only; reads go through the flat rows.
    replies: Mapped[list[Comment]] = relationship(
        "Comment",
        cascade="all, delete-orphan",
    )
    votes: Mapped[list[CommentVote]] = relationship(
        "CommentVote",
        back_populates="comment",
        cascade="all, delete-orphan",
    )


class CommentVote(Base):
    """One up or down vote per (comment, voter) pair."""

    __tablename__ = "comment_votes"
    __table_args__ = (
        UniqueConstraint("comment_id", "voter", name="uq_comment_votes_comment_voter"),
        CheckConstraint("value IN (1, -1)", name="ck_comment_votes_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Display-name identity of the voter, not a foreign key.
    voter: Mapped[str] = mapped_column(Text, nullable=False)

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="votes")
