"""Provider and title resolution: fetch a page, hand it to the extractor."""

from __future__ import annotations

import structlog

from ..config import RankingConfig
from .fetcher import Fetcher
from .parser import MarkupExtractor
from .records import ProviderListing, RawMovie


def normalize_provider_name(name: str | None) -> str:
    """Drop the trailing qualifier word the site appends to provider names.

    ``None`` and ``""`` give ``""``; a single word is returned as is.
    """

    if not name:
        return ""
    words = name.split(" ")
    if len(words) == 1:
        return name
    return " ".join(words[:-1])


class ProviderResolver:
    """Resolve the top providers from the ranking overview page."""

    def __init__(
        self,
        config: RankingConfig,
        fetcher: Fetcher,
        extractor: MarkupExtractor,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.extractor = extractor
        self.logger = logger or structlog.get_logger("vod_ranking.resolvers")

    async def resolve(self) -> list[ProviderListing]:
        html = await self.fetcher.get_html(self.config.ranking_url)
        providers = self.extractor.extract_providers(html, self.config.provider_limit)
        self.logger.info(
            "providers_resolved",
            url=self.config.ranking_url,
            count=len(providers),
            names=[provider.name for provider in providers],
        )
        return providers


class TitleResolver:
    """Resolve the top titles of one provider's yearly ranking page."""

    def __init__(
        self,
        config: RankingConfig,
        fetcher: Fetcher,
        extractor: MarkupExtractor,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.extractor = extractor
        self.logger = logger or structlog.get_logger("vod_ranking.resolvers")

    async def resolve(
        self, provider_url: str | None, year: str, provider_label: str
    ) -> list[RawMovie]:
        if not provider_url:
            self.logger.info("provider_without_link", provider=provider_label)
            return []
        url = self.config.provider_page_url(provider_url, year)
        html = await self.fetcher.get_html(url)
        movies = self.extractor.extract_movies(html, provider_label, self.config.title_limit)
        self.logger.info("titles_resolved", provider=provider_label, url=url, count=len(movies))
        return movies


__all__ = ["ProviderResolver", "TitleResolver", "normalize_provider_name"]
