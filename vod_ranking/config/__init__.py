"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository, apply_overrides
from .models import PageSelectors, RankingConfig, current_year

__all__ = [
    "ConfigLocator",
    "ConfigRepository",
    "PageSelectors",
    "RankingConfig",
    "apply_overrides",
    "current_year",
]
