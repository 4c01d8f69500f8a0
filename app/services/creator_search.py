from __future__ import annotations

from typing import Any

import httpx

from app.core.config import settings


class CreatorSearchClient:
    """HTTP client for the creator search endpoint.

    Returns the decoded payload as-is; shape checks are left to the caller.
    Non-2xx responses raise ``httpx.HTTPStatusError`` and transport failures
    raise ``httpx.TransportError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.search_provider_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.search_timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": "LagosWeekender/1.0"},
        )

    async def search_creators(self, query: str, *, page: int = 1, limit: int | None = None) -> Any:
        params = {"q": query, "page": page, "limit": limit if limit is not None else settings.search_page_size}
        resp = await self._client.get(f"{self.base_url}/search/creators", params=params)
        resp.raise_for_status()
        return resp.json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> CreatorSearchClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
