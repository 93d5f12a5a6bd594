"""CSV exporter writing the reconciled list to a fixed path."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

import structlog

from ..records import EXPORT_COLUMNS, ScoredMovie
from .base import BaseExporter, ExportResult


class CsvExporter(BaseExporter):
    """Write ``Title,VOD name,Rating`` rows, overwriting the target file."""

    def __init__(self, path: Path, logger: structlog.BoundLogger | None = None) -> None:
        self.path = Path(path)
        self.logger = logger or structlog.get_logger("vod_ranking.exporter")

    def export(self, movies: Sequence[ScoredMovie]) -> ExportResult:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", newline="") as stream:
                writer = csv.DictWriter(stream, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
                writer.writeheader()
                for movie in movies:
                    writer.writerow(movie.as_row())
        except OSError as exc:
            self.logger.error("export_failed", path=str(self.path), error=str(exc))
            return ExportResult(path=self.path, error=exc)
        self.logger.info("export_written", path=str(self.path), rows=len(movies))
        return ExportResult(path=self.path, rows=len(movies))


__all__ = ["CsvExporter"]
