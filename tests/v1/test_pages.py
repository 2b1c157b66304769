# tests/v1/test_pages.py
"""Tests for page ownership and protection endpoints."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi import status

from wikireview.api.v1.dependencies import get_mediawiki_client_dep
from wikireview.core.errors import WikiApiError, WikiTokenError
from wikireview.services import MediaWikiClient, PageOwnership


@pytest.fixture()
def mock_wiki(app) -> Any:
    """Replace the MediaWiki client dependency with an async mock."""
    wiki = AsyncMock(spec=MediaWikiClient)
    wiki.fetch_csrf_token.return_value = "csrf+\\"
    wiki.set_protection.return_value = {
        "title": "Rabbit Hole",
        "protections": [{"edit": "autoconfirmed", "expiry": "infinite"}],
    }
    app.dependency_overrides[get_mediawiki_client_dep] = lambda: wiki
    try:
        yield wiki
    finally:
        app.dependency_overrides.pop(get_mediawiki_client_dep, None)


@pytest.fixture()
def owned_page(db_session) -> int:
    PageOwnership(db_session).record_creator(11, "Rabbit Hole", "alice liddell ")
    return 11


def _protect(client, **overrides):
    payload = {"subjectId": 11, "title": "Rabbit Hole", "protect": True}
    payload.update(overrides)
    return client.post("/api/v1/pages/protect", json=payload)


def test_record_and_fetch_creator(client) -> None:
    response = client.post(
        "/api/v1/pages/creator",
        json={"subjectId": 5, "subjectLabel": "New Page", "creator": "Bob"},
    )
    assert response.status_code == status.HTTP_200_OK

    lookup = client.get("/api/v1/pages/creator", params={"subjectId": 5})
    assert lookup.json() == {"creator": "Bob"}
    assert client.get("/api/v1/pages/creator", params={"subjectId": 6}).json() == {"creator": None}


class TestProtect:
    def test_creator_can_protect(self, auth_client, owned_page, mock_wiki) -> None:
        response = _protect(auth_client)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        assert response.json()["result"]["title"] == "Rabbit Hole"
        mock_wiki.fetch_csrf_token.assert_awaited_once()
        args = mock_wiki.set_protection.await_args
        assert args.args == ("Rabbit Hole", True, "csrf+\\")

    def test_supplied_token_skips_fetch(self, auth_client, owned_page, mock_wiki) -> None:
        response = _protect(auth_client, protect=False, token="given+\\")

        assert response.status_code == status.HTTP_200_OK
        mock_wiki.fetch_csrf_token.assert_not_awaited()
        assert mock_wiki.set_protection.await_args.args == ("Rabbit Hole", False, "given+\\")

    def test_requires_login(self, client, owned_page, mock_wiki) -> None:
        response = _protect(client)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        mock_wiki.set_protection.assert_not_awaited()

    def test_non_creator_forbidden(self, auth_client, db_session, mock_wiki) -> None:
        PageOwnership(db_session).record_creator(11, "Rabbit Hole", "bob")

        response = _protect(auth_client)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        mock_wiki.set_protection.assert_not_awaited()

    def test_unknown_page(self, auth_client, mock_wiki) -> None:
        response = _protect(auth_client)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_token_failure(self, auth_client, owned_page, mock_wiki) -> None:
        mock_wiki.fetch_csrf_token.side_effect = WikiTokenError("Failed to get protection token")

        response = _protect(auth_client)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Failed to get protection token"}

    def test_wiki_error(self, auth_client, owned_page, mock_wiki) -> None:
        mock_wiki.set_protection.side_effect = WikiApiError("protectedpage", code="protectedpage")

        response = _protect(auth_client)
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json() == {"error": "protectedpage"}
