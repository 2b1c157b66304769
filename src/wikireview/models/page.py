# src/wikireview/models/page.py
"""Ownership records for wiki pages created through WikiReview."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from wikireview.db.session import Base
from wikireview.db.time import utcnow


class PageCreator(Base):
    """Creator identity keyed by the wiki's immutable page id."""

    __tablename__ = "page_creators"

    subject_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    # Last known title; informational only, never used for lookups.
    subject_label: Mapped[str] = mapped_column(Text, nullable=False)
    creator: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
