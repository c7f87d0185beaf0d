"""Configuration helpers for the scorecard service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any


__all__ = [
    "Settings",
    "coerce_boolish",
    "env_bool",
    "get_settings",
    "reset_settings_cache",
]


DEFAULT_DATA_DIR = Path("data")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    rounds_dir: Path = DEFAULT_DATA_DIR / "rounds"
    config_dir: Path = DEFAULT_DATA_DIR / "config"
    require_api_key: bool = False
    api_keys: frozenset[str] = frozenset()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    data_dir = Path(os.getenv("SCORECARD_DATA_DIR", DEFAULT_DATA_DIR)).expanduser()
    rounds_dir = os.getenv("SCORECARD_ROUNDS_DIR")
    config_dir = os.getenv("SCORECARD_CONFIG_DIR")
    return Settings(
        data_dir=data_dir,
        rounds_dir=Path(rounds_dir).expanduser() if rounds_dir else data_dir / "rounds",
        config_dir=Path(config_dir).expanduser() if config_dir else data_dir / "config",
        require_api_key=env_bool("REQUIRE_API_KEY", False),
        api_keys=_split_keys(os.getenv("API_KEY", "")),
    )


def _split_keys(raw: str) -> frozenset[str]:
    return frozenset(key.strip() for key in raw.split(",") if key.strip())


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def coerce_boolish(value: Any) -> bool | None:
    """Attempt to coerce *value* into a boolean."""

    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    return None
