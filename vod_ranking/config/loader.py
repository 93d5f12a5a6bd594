"""Configuration loading helpers for the ranking job."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .models import RankingConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_FILENAME = "vod_ranking.yaml"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def _write_file(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the project root and the default config file."""

    project_root: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get("VOD_RANKING_HOME")
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path.cwd()).resolve()
        self.project_root = root

    def config_path(self) -> Path:
        return self.project_root / CONFIG_FILENAME


class ConfigRepository:
    """Repository encapsulating config IO and schema validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()

    def load(self, path: Path | None = None) -> RankingConfig:
        """Load configuration from ``path`` or the default location.

        A missing default file yields the built-in defaults; a missing
        explicit path is an error.
        """

        if path is None:
            default_path = self.locator.config_path()
            if not default_path.exists():
                return RankingConfig()
            path = default_path
        elif not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        if path.suffix not in CONFIG_EXTENSIONS:
            raise ValueError(f"Unsupported configuration format: {path.suffix}")
        return RankingConfig.model_validate(_read_file(path))

    def save(
        self, config: RankingConfig, path: Path | None = None, exclude: set[str] | None = None
    ) -> Path:
        target = path or self.locator.config_path()
        _write_file(target, config.model_dump(mode="json", exclude=exclude))
        return target


def apply_overrides(config: RankingConfig, **overrides: object) -> RankingConfig:
    """Return a validated copy of ``config`` with non-None overrides applied."""

    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return config
    payload = config.model_dump()
    payload.update(update)
    return RankingConfig.model_validate(payload)


__all__ = ["ConfigLocator", "ConfigRepository", "CONFIG_EXTENSIONS", "apply_overrides"]
