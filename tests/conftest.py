# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

os.environ.setdefault("PYTEST_RUNNING", "true")

from wikireview.core.settings import Settings, settings
from wikireview.db.session import Database
from wikireview.db.session import get_db as app_get_session
from wikireview.main import app as fastapi_app
from wikireview.models import Comment, User
from wikireview.services import CredentialStore, SessionManager

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture()
def database() -> Iterator[Database]:
    """A private in-memory database per test."""
    db = Database(TEST_DB_URL)
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


def build_register_payload(username: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "username": username,
        "password": TEST_PASSWORD,
        "email": f"{username}@example.org",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted user with a display name."""
    return CredentialStore(db_session).create_user(
        "alice",
        "alice@example.org",
        TEST_PASSWORD,
        display_name="Alice Liddell",
    )


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user without a display name."""
    return CredentialStore(db_session).create_user("bob", "bob@example.org", TEST_PASSWORD)


@pytest.fixture()
def auth_client(client: TestClient, db_session: Session, test_user: User) -> TestClient:
    """A client carrying a valid session cookie for ``test_user``."""
    token = SessionManager(db_session).create_session(test_user.id)
    client.cookies.set(settings.session_cookie_name, token)
    return client


@pytest.fixture()
def test_comment(db_session: Session) -> Comment:
    """Create a top-level comment on page 42."""
    comment = Comment(
        subject_id=42,
        subject_label="Main Page",
        body="First!",
        author_name="Alice Liddell",
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment
