"""
HTTP client for the hub API.

:class:`HubClient` wraps every endpoint and always returns an
:class:`~mcphub.models.Envelope`. Failure envelopes sent by the server
are passed through unchanged; transport errors and bodies that are not
envelopes are mapped to a generic failure asking the user to retry.
There is no retry policy: a failed call stays failed until the caller
tries again.

:class:`RequestSequencer` implements "latest request wins" for callers
that may issue overlapping requests (e.g. a search box): responses to
superseded requests should be dropped.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Iterable, Optional

import httpx
import pydantic

from .models import Envelope

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Please try again."


def _params(**kwargs: Any) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


class HubClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Envelope:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Request %s %s failed: %s", method, path, exc)
            return Envelope.fail(NETWORK_ERROR)
        try:
            return Envelope.model_validate(response.json())
        except (ValueError, pydantic.ValidationError):
            logger.warning(
                "Unexpected response from %s %s (status %s)", method, path, response.status_code
            )
            return Envelope.fail(NETWORK_ERROR)

    # Tools

    async def list_tools(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Envelope:
        params = _params(q=q, category=category, sort=sort, limit=limit, offset=offset)
        if tags:
            params["tags"] = list(tags)
        return await self._request("GET", "/api/tools", params=params)

    async def get_tool(self, tool_id: str) -> Envelope:
        return await self._request("GET", f"/api/tools/{tool_id}")

    async def create_tool(self, tool: Dict[str, Any]) -> Envelope:
        return await self._request("POST", "/api/tools", json=tool)

    async def update_tool(self, tool_id: str, updates: Dict[str, Any]) -> Envelope:
        return await self._request("PUT", f"/api/tools/{tool_id}", json=updates)

    async def delete_tool(self, tool_id: str) -> Envelope:
        return await self._request("DELETE", f"/api/tools/{tool_id}")

    # Blog

    async def list_posts(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        tag: Optional[str] = None,
        published: Optional[str] = None,
    ) -> Envelope:
        params = _params(limit=limit, offset=offset, tag=tag, published=published)
        return await self._request("GET", "/api/blog", params=params)

    async def get_post(self, slug: str) -> Envelope:
        return await self._request("GET", f"/api/blog/{slug}")

    async def create_post(self, post: Dict[str, Any]) -> Envelope:
        return await self._request("POST", "/api/blog", json=post)

    # Documentation

    async def list_docs(
        self,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Envelope:
        params = _params(category=category, limit=limit, offset=offset)
        return await self._request("GET", "/api/documentation", params=params)

    async def get_doc(self, section_id: str) -> Envelope:
        return await self._request("GET", f"/api/documentation/{section_id}")

    async def doc_categories(self) -> Envelope:
        return await self._request("GET", "/api/documentation/meta/categories")

    # Contact

    async def submit_contact(self, message: Dict[str, Any]) -> Envelope:
        return await self._request("POST", "/api/contact", json=message)

    async def health(self) -> Optional[Dict[str, Any]]:
        """Return the health payload, or ``None`` when the API is unreachable."""
        try:
            response = await self.http.get("/api/health")
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Health check failed: %s", exc)
            return None


class RequestSequencer:
    """Hands out increasing tickets and remembers the newest one."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0

    def next(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest
