"""Exporter SPI and implementations."""

from .base import BaseExporter, ExportResult
from .file_exporter import CsvExporter

__all__ = ["BaseExporter", "CsvExporter", "ExportResult"]
