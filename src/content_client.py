"""
Content Page Editor - Content API Client

Async client for the remote content API:

    GET    /content        -> list of pages
    GET    /content/{id}   -> one page
    POST   /content        -> create, returns the stored page
    PUT    /content/{id}   -> partial update, returns the stored page
    DELETE /content/{id}   -> 204, no body

Uses httpx with a short-lived ``AsyncClient`` per call.  Every call is a
single attempt: no retries, no backoff and no timeout beyond the httpx
default.  Failures are raised, never swallowed:

- ``ApiError``     — the server answered with a non-2xx status
- ``NetworkError`` — no usable response (connect/DNS/protocol failure,
                     or a success body that is not JSON)
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from src.config import CONTENT_API_BASE_URL
from src.models import Content, CreateContentDTO, UpdateContentDTO

CONTENT_PATH = "/content"

DEFAULT_HEADERS = {"Content-Type": "application/json"}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class ContentServiceError(Exception):
    """Base class for every failure raised by :class:`ContentService`."""


class ApiError(ContentServiceError):
    """The content API responded with a non-success HTTP status."""

    def __init__(self, message: str, status: int, status_text: str):
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text

    def __repr__(self) -> str:
        return f"ApiError({self.message!r}, status={self.status}, status_text={self.status_text!r})"


class NetworkError(ContentServiceError):
    """The request failed before an HTTP response could be used."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------
class ContentService:
    """
    CRUD operations against ``{base_url}/content``.

    *headers* are sent with every request on top of the JSON content type.
    *transport* replaces the network layer (``httpx.MockTransport`` in
    tests).
    """

    def __init__(
        self,
        base_url: str = CONTENT_API_BASE_URL,
        *,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self._transport = transport

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def _merge_headers(self, headers: dict[str, str] | None) -> httpx.Headers:
        # httpx.Headers.update() replaces keys case-insensitively
        merged = httpx.Headers(DEFAULT_HEADERS)
        merged.update(self.headers)
        merged.update(headers or {})
        return merged

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Returns None for 204 responses without touching the body.
        """
        url = self._build_url(endpoint)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    json=payload,
                    headers=self._merge_headers(headers),
                )

            if not response.is_success:
                logger.warning(
                    "⚠️  {} {} — HTTP {} {}",
                    method,
                    url,
                    response.status_code,
                    response.reason_phrase,
                )
                raise ApiError(
                    f"HTTP error! status: {response.status_code}",
                    response.status_code,
                    response.reason_phrase,
                )

            if response.status_code == 204:
                logger.debug("🗑️  {} {} — 204 No Content", method, url)
                return None

            data = response.json()
            logger.debug("✅ {} {} — {}", method, url, response.status_code)
            return data

        except ApiError:
            raise
        except (httpx.RequestError, ValueError) as e:
            logger.error("❌ {} {} failed: {}", method, url, e)
            raise NetworkError(f"Network error: {str(e) or type(e).__name__}") from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def get_all(self, *, headers: dict[str, str] | None = None) -> list[Content]:
        """Fetch every page, in the order the server returns them."""
        data = await self._request("GET", CONTENT_PATH, headers=headers)
        if not isinstance(data, list):
            logger.error("❌ GET {} returned {} instead of a list", CONTENT_PATH, type(data).__name__)
            raise NetworkError("Network error: expected a list of pages")
        return [Content.model_validate(item) for item in data]

    async def get_by_id(
        self, content_id: int, *, headers: dict[str, str] | None = None
    ) -> Content:
        data = await self._request("GET", f"{CONTENT_PATH}/{content_id}", headers=headers)
        return Content.model_validate(data)

    async def create(
        self, data: CreateContentDTO, *, headers: dict[str, str] | None = None
    ) -> Content:
        created = await self._request(
            "POST", CONTENT_PATH, payload=data.to_payload(), headers=headers
        )
        logger.info("📝 Created page {}", created.get("id"))
        return Content.model_validate(created)

    async def update(
        self,
        content_id: int,
        data: UpdateContentDTO,
        *,
        headers: dict[str, str] | None = None,
    ) -> Content:
        """Send only the fields set on *data*; returns the stored page."""
        updated = await self._request(
            "PUT",
            f"{CONTENT_PATH}/{content_id}",
            payload=data.to_payload(),
            headers=headers,
        )
        logger.info("💾 Updated page {}", content_id)
        return Content.model_validate(updated)

    async def delete(
        self, content_id: int, *, headers: dict[str, str] | None = None
    ) -> None:
        await self._request("DELETE", f"{CONTENT_PATH}/{content_id}", headers=headers)
        logger.info("🗑️  Deleted page {}", content_id)
