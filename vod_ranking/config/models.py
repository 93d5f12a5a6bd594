"""Pydantic models describing a ranking run."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


def current_year() -> str:
    """Return the local calendar year as a four digit string."""

    return str(date.today().year)


class PageSelectors(BaseModel):
    """CSS selectors describing the markup of the ranking pages."""

    provider_list: str = ".rankingProvider__list"
    provider_item: str = "li"
    provider_link: str = "a"
    ranking_container: str = ".rankingTypeSection__container"
    ranking_entry: str = ".rankingType.hasVod"
    title_node: str = ".rankingType__title"
    title_link: str = "a"
    rating_node: str = ".rankingType__rate--value"


class RankingConfig(BaseModel):
    """Everything a single fetch → reconcile → export cycle needs."""

    ranking_url: str = "https://www.filmweb.pl/ranking/vod/film"
    base_url: str = "https://www.filmweb.pl"
    provider_limit: int = 4
    title_limit: int = 10
    target_year: str = Field(default_factory=current_year)
    output_path: Path = Field(default=Path("movies.csv"))
    request_timeout: float | None = 15.0
    user_agent: str | None = None
    selectors: PageSelectors = Field(default_factory=PageSelectors)

    @field_validator("ranking_url")
    @classmethod
    def _require_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("ranking_url cannot be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_base(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("provider_limit", "title_limit")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("limits must be >= 0")
        return value

    @field_validator("target_year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> str:
        if value is None:
            return current_year()
        text = str(value).strip()
        if len(text) != 4 or not text.isdigit():
            raise ValueError(f"target_year must be a four digit year, got {value!r}")
        return text

    @field_validator("output_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("request_timeout must be > 0")
        return value

    def provider_page_url(self, provider_url: str, year: str | None = None) -> str:
        """Build the yearly ranking URL for a provider's relative link."""

        return f"{self.base_url}{provider_url}/{year or self.target_year}"


__all__ = ["PageSelectors", "RankingConfig", "current_year"]
