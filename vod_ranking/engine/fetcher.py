"""Asynchronous page fetching on top of httpx."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import httpx
import structlog


class FetchError(RuntimeError):
    """Transport-level failure while fetching a page. Never retried."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"Fetch failed for {url}: {message}")
        self.url = url
        self.status_code = status_code


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)


class Fetcher:
    """Issue single GET requests and hand back the body as text.

    No retry, caching or rate limiting happens here; the first failure is
    raised as :class:`FetchError`.
    """

    def __init__(
        self,
        timeout: float | None = 15.0,
        user_agent: str | None = None,
        client: httpx.AsyncClient | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.logger = logger or structlog.get_logger("vod_ranking.fetcher")
        self._owns_client = client is None
        if client is None:
            client_kwargs: dict[str, object] = {"follow_redirects": True}
            # Without a timeout httpx keeps its own transport default.
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            if user_agent:
                client_kwargs["headers"] = {"User-Agent": user_agent}
            client = httpx.AsyncClient(**client_kwargs)
        self._client = client

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, url: str) -> FetchResponse:
        self.logger.debug("fetch_started", url=url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self.logger.warning("fetch_failed", url=url, status_code=status, error=str(exc))
            raise FetchError(url, f"unexpected status {status}", status_code=status) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.logger.warning("fetch_failed", url=url, error=str(exc))
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        self.logger.debug("fetch_finished", url=url, status_code=response.status_code)
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
        )

    async def get_html(self, url: str) -> str:
        return (await self.fetch(url)).text


__all__ = ["FetchError", "FetchResponse", "Fetcher"]
