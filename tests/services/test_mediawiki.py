# tests/services/test_mediawiki.py
"""Tests for the MediaWiki API client using a mocked transport."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from wikireview.core.errors import WikiApiError, WikiTokenError
from wikireview.services.mediawiki import MediaWikiClient

API_URL = "http://wiki.test/api.php"


def _client(handler) -> MediaWikiClient:
    return MediaWikiClient(API_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_csrf_token_forwards_cookies() -> None:
    seen: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"query": {"tokens": {"csrftoken": "abc123+\\"}}})

    client = _client(handler)
    try:
        token = await client.fetch_csrf_token(cookie_header="wiki_session=xyz")
    finally:
        await client.close()

    assert token == "abc123+\\"
    request = seen["request"]
    assert request.method == "GET"
    assert request.url.params["meta"] == "tokens"
    assert request.url.params["type"] == "csrf"
    assert request.headers["cookie"] == "wiki_session=xyz"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"query": {"tokens": {"csrftoken": "+\\"}}},
        {"query": {"tokens": {}}},
        {"error": {"code": "badtoken", "info": "nope"}},
    ],
)
async def test_fetch_csrf_token_rejects_anonymous_or_missing(payload) -> None:
    client = _client(lambda request: httpx.Response(200, json=payload))
    try:
        with pytest.raises(WikiTokenError):
            await client.fetch_csrf_token()
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_fetch_csrf_token_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(WikiTokenError):
            await client.fetch_csrf_token()
    finally:
        await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(("protect", "expected"), [(True, "edit=autoconfirmed"), (False, "edit=")])
async def test_set_protection_posts_form(protect, expected) -> None:
    seen: dict[str, dict] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["form"] = {k: v[0] for k, v in parse_qs(request.content.decode(), keep_blank_values=True).items()}
        return httpx.Response(
            200,
            json={"protect": {"title": "Rabbit Hole", "protections": [{"edit": "autoconfirmed"}]}},
        )

    client = _client(handler)
    try:
        result = await client.set_protection("Rabbit Hole", protect, "tok+\\")
    finally:
        await client.close()

    assert result["title"] == "Rabbit Hole"
    form = seen["form"]
    assert form["action"] == "protect"
    assert form["title"] == "Rabbit Hole"
    assert form["token"] == "tok+\\"
    assert form["protections"] == expected


@pytest.mark.asyncio
async def test_set_protection_wiki_error() -> None:
    client = _client(
        lambda request: httpx.Response(
            200, json={"error": {"code": "permissiondenied", "info": "You may not protect"}}
        )
    )
    try:
        with pytest.raises(WikiApiError) as excinfo:
            await client.set_protection("Rabbit Hole", True, "tok")
    finally:
        await client.close()

    assert excinfo.value.code == "permissiondenied"
    assert excinfo.value.message == "You may not protect"
    assert not isinstance(excinfo.value, WikiTokenError)


@pytest.mark.asyncio
async def test_non_json_response() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    try:
        with pytest.raises(WikiApiError, match="non-JSON"):
            await client.set_protection("Rabbit Hole", True, "tok")
    finally:
        await client.close()
