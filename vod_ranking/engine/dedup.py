"""Reconciliation of per-provider rankings into one list unique by title."""

from __future__ import annotations

import math
import re
from typing import Iterable, Sequence

from .records import RawMovie, ScoredMovie

# Leading decimal number, mirroring a lenient float parse ("8.5/10" -> 8.5).
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_rating(text: str) -> float:
    """Convert a comma-decimal rating such as ``"8,5"`` to ``8.5``.

    Only the first comma is replaced. Text without a leading number gives NaN.
    """

    match = _NUMBER_PREFIX.match(text.replace(",", ".", 1))
    if match is None:
        return math.nan
    return float(match.group(1))


def rating_key(movie: ScoredMovie) -> tuple[bool, float]:
    """Total order over ratings with NaN below every number."""

    value = movie.rating_value
    if math.isnan(value):
        return (False, 0.0)
    return (True, value)


def score_movies(per_provider: Iterable[Sequence[RawMovie]]) -> list[ScoredMovie]:
    """Flatten in provider order, then ranking order, and attach numeric ratings."""

    return [
        ScoredMovie.from_raw(movie, parse_rating(movie.rating_text))
        for movies in per_provider
        for movie in movies
    ]


def sort_by_rating(movies: Iterable[ScoredMovie]) -> list[ScoredMovie]:
    """Stable sort, highest rating first; equal ratings keep their order."""

    return sorted(movies, key=rating_key, reverse=True)


def deduplicate_titles(movies: Iterable[ScoredMovie]) -> list[ScoredMovie]:
    """Keep one record per exact title, the highest rated one.

    A later duplicate replaces the kept record only when strictly higher, so
    ties go to the first encountered. Output follows first-insertion order.
    """

    kept: dict[str, ScoredMovie] = {}
    for movie in movies:
        current = kept.get(movie.title)
        if current is None or rating_key(movie) > rating_key(current):
            kept[movie.title] = movie
    return list(kept.values())


def reconcile(per_provider: Iterable[Sequence[RawMovie]]) -> list[ScoredMovie]:
    return deduplicate_titles(sort_by_rating(score_movies(per_provider)))


__all__ = [
    "deduplicate_titles",
    "parse_rating",
    "rating_key",
    "reconcile",
    "score_movies",
    "sort_by_rating",
]
