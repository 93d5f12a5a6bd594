"""Engine components orchestrating fetch → extract → reconcile → export."""

from .dedup import deduplicate_titles, parse_rating, reconcile, score_movies, sort_by_rating
from .fetcher import FetchError, FetchResponse, Fetcher
from .parser import MarkupExtractor
from .records import ProviderListing, RawMovie, ScoredMovie
from .resolvers import ProviderResolver, TitleResolver, normalize_provider_name

__all__ = [
    "FetchError",
    "FetchResponse",
    "Fetcher",
    "MarkupExtractor",
    "ProviderListing",
    "ProviderResolver",
    "RawMovie",
    "ScoredMovie",
    "TitleResolver",
    "deduplicate_titles",
    "normalize_provider_name",
    "parse_rating",
    "reconcile",
    "score_movies",
    "sort_by_rating",
]
