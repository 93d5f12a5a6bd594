"""Pipeline orchestrator: providers → titles (concurrently) → reconcile → export."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog

from .config import RankingConfig
from .engine import (
    Fetcher,
    MarkupExtractor,
    ProviderListing,
    ProviderResolver,
    RawMovie,
    ScoredMovie,
    TitleResolver,
    normalize_provider_name,
    reconcile,
)
from .engine.exporter import BaseExporter, CsvExporter, ExportResult
from .logging_conf import configure_logging


@dataclass(slots=True)
class RunSummary:
    """What one pipeline cycle produced."""

    year: str
    providers: list[ProviderListing] = field(default_factory=list)
    movies: list[ScoredMovie] = field(default_factory=list)
    export: ExportResult | None = None

    @property
    def export_ok(self) -> bool:
        return self.export is not None and self.export.ok


class Orchestrator:
    """Central coordinator for a single ranking run."""

    def __init__(
        self,
        config: RankingConfig,
        fetcher: Fetcher | None = None,
        extractor: MarkupExtractor | None = None,
        exporter: BaseExporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = (logger or configure_logging()).bind(component="orchestrator")
        self._fetcher = fetcher
        self.extractor = extractor or MarkupExtractor(config.selectors)
        self.exporter = exporter or CsvExporter(config.output_path, logger=self.logger)

    async def run(self) -> RunSummary:
        fetcher = self._fetcher or Fetcher(
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
            logger=self.logger,
        )
        try:
            return await self._run(fetcher)
        finally:
            if self._fetcher is None:
                await fetcher.aclose()

    def run_sync(self) -> RunSummary:
        return asyncio.run(self.run())

    async def _run(self, fetcher: Fetcher) -> RunSummary:
        year = self.config.target_year
        providers = await ProviderResolver(
            self.config, fetcher, self.extractor, logger=self.logger
        ).resolve()

        titles = TitleResolver(self.config, fetcher, self.extractor, logger=self.logger)
        tasks = [
            asyncio.ensure_future(
                titles.resolve(provider.url, year, normalize_provider_name(provider.name))
            )
            for provider in providers
        ]
        try:
            # gather keeps results positional, so flatten order is provider order.
            per_provider: list[list[RawMovie]] = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        movies = reconcile(per_provider)
        self.logger.info(
            "reconciled",
            year=year,
            providers=len(providers),
            raw=sum(len(items) for items in per_provider),
            unique=len(movies),
        )
        export = self.exporter.export(movies)
        return RunSummary(year=year, providers=providers, movies=movies, export=export)


__all__ = ["Orchestrator", "RunSummary"]
