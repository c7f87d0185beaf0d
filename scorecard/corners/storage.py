from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from scorecard.config import coerce_boolish, get_settings

from .schemas import CornerStatisticsConfig

logger = logging.getLogger(__name__)

CORNER_CONFIG_FILE = "corner_config.json"
COLUMN_VISIBILITY_FILE = "column_visibility.json"


class ColumnVisibility(BaseModel):
    distance: bool = True
    par: bool = False
    g_stats: bool = Field(
        default=True,
        validation_alias=AliasChoices("g_stats", "gStats"),
        serialization_alias="gStats",
    )
    show_underlines: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("show_underlines", "showUnderlines"),
        serialization_alias="showUnderlines",
    )
    show_font_size_adjustments: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices(
            "show_font_size_adjustments", "showFontSizeAdjustments"
        ),
        serialization_alias="showFontSizeAdjustments",
    )
    show_font_color_adjustments: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices(
            "show_font_color_adjustments", "showFontColorAdjustments"
        ),
        serialization_alias="showFontColorAdjustments",
    )

    model_config = ConfigDict(populate_by_name=True)


class CornerConfigStore:
    """Persist the scorecard's corner and column settings as JSON files."""

    def __init__(self, base_dir: Path | str | None = None):
        base = Path(base_dir or get_settings().config_dir).expanduser()
        self._base_dir = base.resolve()

    def _read_json(self, name: str) -> dict | None:
        path = self._base_dir / name
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except Exception:
            logger.warning("failed to read %s", path, exc_info=True)
            return None
        return data if isinstance(data, dict) else None

    def _write_json(self, name: str, payload: dict) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._base_dir / name
        path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def get_corner_config(self) -> CornerStatisticsConfig | None:
        data = self._read_json(CORNER_CONFIG_FILE)
        if data is None:
            return None
        try:
            return CornerStatisticsConfig.model_validate(data)
        except ValidationError:
            logger.warning("ignoring invalid corner config", exc_info=True)
            return None

    def save_corner_config(self, config: CornerStatisticsConfig) -> None:
        self._write_json(
            CORNER_CONFIG_FILE,
            config.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    def get_column_visibility(self) -> ColumnVisibility:
        data = self._read_json(COLUMN_VISIBILITY_FILE)
        if data is None:
            return ColumnVisibility()
        cleaned = {
            key: flag
            for key, flag in ((k, coerce_boolish(v)) for k, v in data.items())
            if flag is not None
        }
        return ColumnVisibility.model_validate(cleaned)

    def save_column_visibility(self, visibility: ColumnVisibility) -> None:
        self._write_json(
            COLUMN_VISIBILITY_FILE,
            visibility.model_dump(mode="json", by_alias=True, exclude_none=True),
        )


@lru_cache(maxsize=1)
def get_corner_config_store() -> CornerConfigStore:
    return CornerConfigStore()


__all__ = [
    "ColumnVisibility",
    "CornerConfigStore",
    "get_corner_config_store",
]
