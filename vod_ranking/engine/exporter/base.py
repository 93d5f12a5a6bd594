"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..records import ScoredMovie


@dataclass(slots=True)
class ExportResult:
    """Outcome of an export; failures are reported here instead of raised."""

    path: Path
    rows: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseExporter(ABC):
    """Uniform exporter contract for the reconciled list."""

    @abstractmethod
    def export(self, movies: Sequence[ScoredMovie]) -> ExportResult:
        """Persist the whole reconciled list, replacing any previous output."""


__all__ = ["BaseExporter", "ExportResult"]
