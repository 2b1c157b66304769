# src/wikireview/models/user.py
"""SQLAlchemy models for accounts and login sessions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wikireview.db.session import Base
from wikireview.db.time import utcnow


class User(Base):
    """Registered account with a salted password hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # Stored as "<salt hex>:<pbkdf2 digest hex>"; plaintext is never persisted.
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    sessions: Mapped[list[UserSession]] = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def identity(self) -> str:
        """Return the name used for authorship, votes and ratings."""
        return self.display_name or self.username


class UserSession(Base):
    """Opaque bearer token issued at login or registration."""

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Milliseconds since the Unix epoch.
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    user: Mapped[User] = relationship("User", back_populates="sessions")
