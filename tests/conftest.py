"""Shared fixtures: a fake ranking site behind httpx.MockTransport."""

from __future__ import annotations

import asyncio
from html import escape
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import structlog

from vod_ranking.config import RankingConfig

BASE_URL = "https://vod.test"
RANKING_URL = f"{BASE_URL}/ranking/vod/film"


def overview_page(*providers: tuple[str | None, str | None]) -> str:
    """Overview page with one ``<li><a title href>`` per provider."""

    items = []
    for title, href in providers:
        attrs = ""
        if title is not None:
            attrs += f' title="{escape(title)}"'
        if href is not None:
            attrs += f' href="{escape(href)}"'
        items.append(f"<li><a{attrs}>{escape(title or '')}</a></li>")
    return (
        "<html><body><nav><ul class='rankingProvider__list'>"
        + "".join(items)
        + "</ul></nav></body></html>"
    )


def ranking_entry(title: str | None, rating: str | None, has_vod: bool = True) -> str:
    classes = "rankingType hasVod" if has_vod else "rankingType"
    title_html = (
        f"<h2 class='rankingType__title'><a href='/film/x'>{escape(title)}</a></h2>"
        if title is not None
        else ""
    )
    rating_html = (
        f"<span class='rankingType__rate--value'>{escape(rating)}</span>"
        if rating is not None
        else ""
    )
    return f"<div class='{classes}'>{title_html}<div class='rankingType__rate'>{rating_html}</div></div>"


def ranking_page(*entries: tuple[str | None, str | None], extra: str = "") -> str:
    body = "".join(ranking_entry(title, rating) for title, rating in entries)
    return (
        "<html><body><section class='rankingTypeSection__container'>"
        + body
        + extra
        + "</section></body></html>"
    )


class FakeSite:
    """Serve canned pages by URL and record every request made."""

    def __init__(self, pages: dict[str, str | int] | None = None, delay: float = 0.0) -> None:
        self.pages: dict[str, str | int] = dict(pages or {})
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            page = self.pages.get(url, 404)
        finally:
            self.in_flight -= 1
        if isinstance(page, int):
            return httpx.Response(page, request=request, text="error")
        return httpx.Response(200, request=request, text=page)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def ranking_config(tmp_path: Path) -> RankingConfig:
    return RankingConfig(
        ranking_url=RANKING_URL,
        base_url=BASE_URL,
        target_year="2024",
        output_path=tmp_path / "movies.csv",
    )


@pytest.fixture
def fake_site() -> Callable[..., FakeSite]:
    def _builder(pages: dict[str, str | int] | None = None, **kwargs: Any) -> FakeSite:
        return FakeSite(pages, **kwargs)

    return _builder


@pytest.fixture
def quiet_logger() -> structlog.BoundLogger:
    return structlog.get_logger("vod_ranking.tests")
