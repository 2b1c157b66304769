# tests/services/test_sessions.py
"""Tests for session issuance, expiry and revocation."""

from datetime import UTC, datetime, timedelta

import pytest

from wikireview.models import UserSession
from wikireview.services.sessions import SessionManager

ISSUED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _clock(moment: datetime):
    return lambda: moment


@pytest.fixture()
def manager(db_session) -> SessionManager:
    return SessionManager(db_session, clock=_clock(ISSUED_AT))


def test_create_session_stores_expiry(manager, db_session, test_user) -> None:
    token = manager.create_session(test_user.id)

    row = db_session.get(UserSession, token)
    expected = int((ISSUED_AT + timedelta(days=30)).timestamp() * 1000)
    assert row.user_id == test_user.id
    assert row.expires_at == expected


def test_get_session_active(manager, test_user) -> None:
    token = manager.create_session(test_user.id)
    assert manager.get_session(token).user_id == test_user.id


def test_expired_session_looks_missing(manager, db_session, test_user) -> None:
    token = manager.create_session(test_user.id)
    later = SessionManager(db_session, clock=_clock(ISSUED_AT + timedelta(days=31)))

    assert later.get_session(token) is None
    assert later.get_session("does-not-exist") is None
    assert later.resolve_user(token) is None


def test_session_is_inactive_at_exact_expiry(manager, db_session, test_user) -> None:
    token = manager.create_session(test_user.id)
    at_expiry = SessionManager(db_session, clock=_clock(ISSUED_AT + timedelta(days=30)))

    assert at_expiry.get_session(token) is None


def test_delete_session_is_idempotent(manager, test_user) -> None:
    token = manager.create_session(test_user.id)

    manager.delete_session(token)
    manager.delete_session(token)
    manager.delete_session(None)

    assert manager.get_session(token) is None


def test_resolve_user(manager, test_user) -> None:
    token = manager.create_session(test_user.id)

    assert manager.resolve_user(token).id == test_user.id
    assert manager.resolve_user(None) is None
    assert manager.resolve_user("") is None


def test_purge_expired_sessions(db_session, test_user, other_user) -> None:
    old = SessionManager(db_session, clock=_clock(ISSUED_AT - timedelta(days=40)))
    stale = old.create_session(test_user.id)
    current = SessionManager(db_session, clock=_clock(ISSUED_AT))
    fresh = current.create_session(other_user.id)

    assert current.purge_expired_sessions() == 1
    assert db_session.get(UserSession, stale) is None
    assert current.get_session(fresh) is not None
    assert current.purge_expired_sessions() == 0


def test_custom_ttl(db_session, test_user) -> None:
    manager = SessionManager(db_session, ttl=timedelta(hours=1), clock=_clock(ISSUED_AT))
    token = manager.create_session(test_user.id)
    later = SessionManager(db_session, clock=_clock(ISSUED_AT + timedelta(hours=2)))

    assert later.get_session(token) is None
