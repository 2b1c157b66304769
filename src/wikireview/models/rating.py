# src/wikireview/models/rating.py
"""Star ratings attached to wiki pages."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Integer,
    SmallInteger,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from wikireview.db.session import Base
from wikireview.db.time import utcnow


class Rating(Base):
    """One 1-5 star rating per (page, rater); resubmission overwrites it."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("subject_id", "voter", name="uq_ratings_subject_voter"),
        CheckConstraint("value >= 1 AND value <= 5", name="ck_ratings_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    subject_label: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    voter: Mapped[str] = mapped_column(Text, nullable=False, default="Anonymous")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
