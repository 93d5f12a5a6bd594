from __future__ import annotations

import math

import pytest

from vod_ranking.engine import RawMovie, ScoredMovie
from vod_ranking.engine.dedup import (
    deduplicate_titles,
    parse_rating,
    reconcile,
    score_movies,
    sort_by_rating,
)


def scored(title: str, rating: float, provider: str, text: str | None = None) -> ScoredMovie:
    return ScoredMovie(
        title=title,
        rating_text=text if text is not None else str(rating).replace(".", ","),
        provider_name=provider,
        rating_value=rating,
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("8,5", 8.5),
        ("7,5", 7.5),
        ("10", 10.0),
        ("8.1", 8.1),
        ("8,5/10", 8.5),
        (" 6,25 ", 6.25),
    ],
)
def test_parse_rating_handles_comma_decimals(text: str, expected: float) -> None:
    assert parse_rating(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "brak", ",", "n/a"])
def test_parse_rating_malformed_is_nan(text: str) -> None:
    assert math.isnan(parse_rating(text))


def test_parse_rating_is_stable_on_reserialised_text() -> None:
    value = parse_rating("8,5")
    assert parse_rating(str(value).replace(".", ",")) == value


def test_score_movies_flattens_in_provider_order() -> None:
    per_provider = [
        [RawMovie("A", "8,1", "Netflix"), RawMovie("B", "7,9", "Netflix")],
        [],
        [RawMovie("C", "8,3", "HBO Max")],
    ]
    movies = score_movies(per_provider)
    assert [movie.title for movie in movies] == ["A", "B", "C"]
    assert [movie.rating_value for movie in movies] == [8.1, 7.9, 8.3]
    assert movies[2].rating_text == "8,3"
    assert movies[2].provider_name == "HBO Max"


@pytest.mark.parametrize(
    "order",
    [[9.1, 8.5, 7.2], [7.2, 8.5, 9.1], [8.5, 7.2, 9.1]],
)
def test_sort_by_rating_descending(order: list[float]) -> None:
    movies = [scored(f"M{value}", value, "P") for value in order]
    assert [movie.rating_value for movie in sort_by_rating(movies)] == [9.1, 8.5, 7.2]


def test_sort_by_rating_is_stable_for_equal_ratings() -> None:
    movies = [
        scored("First", 8.0, "P1"),
        scored("Top", 9.0, "P1"),
        scored("Second", 8.0, "P2"),
        scored("Third", 8.0, "P3"),
    ]
    result = sort_by_rating(movies)
    assert [movie.title for movie in result] == ["Top", "First", "Second", "Third"]


def test_sort_by_rating_puts_nan_last_in_original_order() -> None:
    movies = [
        scored("Broken1", math.nan, "P", text=""),
        scored("Good", 5.0, "P"),
        scored("Broken2", math.nan, "P", text="?"),
        scored("Best", 8.0, "P"),
    ]
    result = sort_by_rating(movies)
    assert [movie.title for movie in result] == ["Best", "Good", "Broken1", "Broken2"]


def test_sort_by_rating_does_not_mutate_input() -> None:
    movies = [scored("Low", 1.0, "P"), scored("High", 2.0, "P")]
    sort_by_rating(movies)
    assert [movie.title for movie in movies] == ["Low", "High"]


def test_sorted_then_deduplicated_keeps_highest_rating() -> None:
    movies = [
        scored("Movie1", 8.5, "ProviderA"),
        scored("Movie2", 7.5, "ProviderB"),
        scored("Movie1", 9.0, "ProviderC"),
    ]
    result = deduplicate_titles(sort_by_rating(movies))
    assert result == [scored("Movie1", 9.0, "ProviderC"), scored("Movie2", 7.5, "ProviderB")]


def test_deduplicate_equal_ratings_keeps_first_encountered() -> None:
    movies = [
        scored("Movie1", 8.5, "Provider1"),
        scored("Movie1", 8.5, "Provider2"),
        scored("Movie1", 8.5, "Provider3"),
    ]
    result = deduplicate_titles(sort_by_rating(movies))
    assert result == [scored("Movie1", 8.5, "Provider1")]


def test_deduplicate_without_sorting_still_keeps_maximum() -> None:
    movies = [
        scored("Movie 1", 8.5, "Provider 1"),
        scored("Movie 2", 7.5, "Provider 2"),
        scored("Movie 1", 9.0, "Provider 3"),
        scored("Movie 2", 8.0, "Provider 4"),
    ]
    result = deduplicate_titles(movies)
    # Replacement keeps the position where the title was first inserted.
    assert result == [scored("Movie 1", 9.0, "Provider 3"), scored("Movie 2", 8.0, "Provider 4")]


def test_deduplicate_without_duplicates_is_identity() -> None:
    movies = [scored("A", 7.0, "P"), scored("B", 9.0, "Q")]
    assert deduplicate_titles(movies) == movies


def test_deduplicate_is_case_and_whitespace_sensitive() -> None:
    movies = [scored("Dune", 8.0, "P"), scored("dune", 7.0, "P"), scored("Dune ", 6.0, "P")]
    assert len(deduplicate_titles(movies)) == 3


def test_deduplicate_prefers_number_over_nan() -> None:
    movies = [scored("X", math.nan, "Broken", text=""), scored("X", 6.0, "Fine")]
    result = deduplicate_titles(movies)
    assert len(result) == 1
    assert result[0].provider_name == "Fine"


def test_deduplicate_empty_input() -> None:
    assert deduplicate_titles([]) == []


def test_reconcile_merges_providers() -> None:
    per_provider = [
        [RawMovie("Shared", "7,0", "Netflix"), RawMovie("Only A", "8,2", "Netflix")],
        [RawMovie("Shared", "8,9", "Disney+"), RawMovie("Only B", "6,4", "Disney+")],
    ]
    result = reconcile(per_provider)
    assert [(movie.title, movie.provider_name, movie.rating_text) for movie in result] == [
        ("Shared", "Disney+", "8,9"),
        ("Only A", "Netflix", "8,2"),
        ("Only B", "Disney+", "6,4"),
    ]
