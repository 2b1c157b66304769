"""Session manager for opaque, expiring login tokens."""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from wikireview.core import security
from wikireview.core.settings import settings
from wikireview.db.time import epoch_millis, utcnow
from wikireview.models.user import User, UserSession

from .base import StoreService

__all__ = ["SessionManager"]

logger = logging.getLogger(__name__)


class SessionManager(StoreService):
    """Issues, resolves and revokes session tokens.

    A session is active until ``expires_at``; expiry is checked on every read,
    so stale rows behave exactly like missing ones until they are purged.
    """

    def __init__(
        self,
        db: Session,
        *,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(db)
        self.ttl = ttl or timedelta(days=settings.session_ttl_days)
        self.clock = clock

    def _now_ms(self) -> int:
        return epoch_millis(self.clock())

    def create_session(self, user_id: int) -> str:
        """Store a fresh token for ``user_id`` and return it."""
        token = security.generate_session_token()
        expires_at = epoch_millis(self.clock() + self.ttl)
        self.db.add(UserSession(token=token, user_id=user_id, expires_at=expires_at))
        self._commit("create session")
        return token

    def get_session(self, token: str | None) -> UserSession | None:
        """Return the active session for ``token`` or ``None`` if unknown or expired."""
        if not token:
            return None
        return self.db.scalars(
            select(UserSession).where(
                UserSession.token == token,
                UserSession.expires_at > self._now_ms(),
            )
        ).first()

    def delete_session(self, token: str | None) -> None:
        """Revoke ``token``; revoking an unknown token is a no-op."""
        if not token:
            return
        self.db.execute(delete(UserSession).where(UserSession.token == token))
        self._commit("delete session")

    def purge_expired_sessions(self) -> int:
        """Delete every expired session row and return how many were removed."""
        result = self.db.execute(
            delete(UserSession).where(UserSession.expires_at <= self._now_ms())
        )
        self._commit("purge expired sessions")
        removed = result.rowcount or 0
        logger.info("Purged %d expired sessions", removed)
        return removed

    def resolve_user(self, token: str | None) -> User | None:
        """Resolve token -> session -> user; any missing link yields ``None``."""
        session = self.get_session(token)
        if session is None:
            return None
        return self.db.get(User, session.user_id)
