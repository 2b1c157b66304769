"""Thin client for the external MediaWiki action API.

Only the protection workflow goes through WikiReview, in two explicit steps:
acquire a CSRF token with :meth:`MediaWikiClient.fetch_csrf_token`, then spend
it in :meth:`MediaWikiClient.set_protection`. Token failures raise
``WikiTokenError``; wiki-reported failures of the mutation raise ``WikiApiError``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wikireview.core.errors import WikiApiError, WikiTokenError
from wikireview.core.settings import settings

logger = logging.getLogger(__name__)

# Token MediaWiki hands to anonymous sessions; it cannot authorize writes.
ANONYMOUS_CSRF_TOKEN = "+\\"

PROTECT_EDIT = "edit=autoconfirmed"
UNPROTECT_EDIT = "edit="


class MediaWikiClient:
    """Async HTTP client for ``api.php`` with a lazily created connection pool."""

    def __init__(
        self,
        api_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url or settings.mediawiki_api_url
        self.timeout_seconds = timeout_seconds or settings.mediawiki_http_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def _headers(cookie_header: str | None) -> dict[str, str]:
        # The wiki session lives in the browser's cookies; forward them as-is.
        return {"Cookie": cookie_header} if cookie_header else {}

    async def _call(
        self,
        method: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        cookie_header: str | None = None,
        error_cls: type[WikiApiError] = WikiApiError,
    ) -> dict[str, Any]:
        client = self._ensure_client()
        try:
            response = await client.request(
                method,
                self.api_url,
                params=params,
                data=data,
                headers=self._headers(cookie_header),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("MediaWiki request failed: %s", exc)
            raise error_cls(f"MediaWiki request failed: {exc}") from exc
        except ValueError as exc:
            raise error_cls("MediaWiki returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise error_cls("Unexpected response from MediaWiki")
        return payload

    async def fetch_csrf_token(self, *, cookie_header: str | None = None) -> str:
        """Acquire a CSRF token for the wiki session identified by ``cookie_header``.

        Raises:
            WikiTokenError: If the wiki refuses or only offers the anonymous token.
        """
        payload = await self._call(
            "GET",
            params={"action": "query", "meta": "tokens", "type": "csrf", "format": "json"},
            cookie_header=cookie_header,
            error_cls=WikiTokenError,
        )
        error = payload.get("error")
        token = payload.get("query", {}).get("tokens", {}).get("csrftoken") or ""
        if error or not token or token == ANONYMOUS_CSRF_TOKEN:
            code = error.get("code") if isinstance(error, dict) else None
            raise WikiTokenError(
                "Failed to get protection token. You may need to log in to MediaWiki.",
                code=code,
            )
        return token

    async def set_protection(
        self,
        title: str,
        protect: bool,
        token: str,
        *,
        cookie_header: str | None = None,
    ) -> dict[str, Any]:
        """Enable or lift edit protection on ``title`` using a pre-acquired token.

        Returns:
            The ``protect`` block of the wiki's response.

        Raises:
            WikiApiError: If the wiki reports an error or answers unexpectedly.
        """
        form = {
            "action": "protect",
            "title": title,
            "token": token,
            "format": "json",
            "protections": PROTECT_EDIT if protect else UNPROTECT_EDIT,
            "reason": (
                "Page protection enabled by creator"
                if protect
                else "Page protection disabled by creator"
            ),
        }
        payload = await self._call("POST", data=form, cookie_header=cookie_header)
        error = payload.get("error")
        if isinstance(error, dict):
            logger.warning("MediaWiki protect error on %s: %s", title, error)
            raise WikiApiError(
                error.get("info") or "Failed to set page protection",
                code=error.get("code"),
            )
        result = payload.get("protect")
        if not isinstance(result, dict) or "protections" not in result:
            raise WikiApiError("Unexpected response from MediaWiki")
        return result

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


_client: MediaWikiClient | None = None


def get_mediawiki_client() -> MediaWikiClient:
    """Return the process-wide MediaWiki client."""
    global _client
    if _client is None:
        _client = MediaWikiClient()
    return _client
