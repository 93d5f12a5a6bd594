"""Typed records flowing through the ranking pipeline."""

from __future__ import annotations

from dataclasses import dataclass

EXPORT_COLUMNS = ("Title", "VOD name", "Rating")


@dataclass(frozen=True, slots=True)
class ProviderListing:
    """A provider exactly as found on the overview page; both fields may be absent."""

    name: str | None
    url: str | None


@dataclass(frozen=True, slots=True)
class RawMovie:
    """One ranking entry of a provider, rating still in locale format."""

    title: str
    rating_text: str
    provider_name: str


@dataclass(frozen=True, slots=True)
class ScoredMovie:
    """A :class:`RawMovie` with its numeric rating."""

    title: str
    rating_text: str
    provider_name: str
    rating_value: float

    @classmethod
    def from_raw(cls, raw: RawMovie, rating_value: float) -> "ScoredMovie":
        return cls(
            title=raw.title,
            rating_text=raw.rating_text,
            provider_name=raw.provider_name,
            rating_value=rating_value,
        )

    def as_row(self) -> dict[str, str]:
        title, provider, rating = EXPORT_COLUMNS
        return {title: self.title, provider: self.provider_name, rating: self.rating_text}


__all__ = ["EXPORT_COLUMNS", "ProviderListing", "RawMovie", "ScoredMovie"]
