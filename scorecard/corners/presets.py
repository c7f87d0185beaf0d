"""Named corner configurations offered when setting up a scorecard."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel

from .schemas import (
    AccumulationMode,
    AllRounds,
    BestRound,
    CornerConfig,
    EachUser,
    Everyone,
    LatestRounds,
    Scope,
    TodaysPlayers,
    UserFilterMode,
)

PRESET_CUSTOM = "Custom"
DEFAULT_PRESET = "Personal Best on Hole"

# Fields that define what a corner computes; display fields are ignored when
# matching a config against the presets.
_STATISTIC_FIELDS = {
    "score_user_filter",
    "round_user_filter",
    "user_filter_mode",
    "accumulation_mode",
    "scope",
    "round_selection",
    "percentile",
    "since_date",
    "until_date",
}


class Preset(BaseModel):
    name: str
    config: CornerConfig


def _personal(
    mode: AccumulationMode,
    scope: Scope,
    selection,
    filter_mode: UserFilterMode = UserFilterMode.OR,
) -> CornerConfig:
    return CornerConfig(
        score_user_filter=EachUser(),
        round_user_filter=TodaysPlayers(),
        accumulation_mode=mode,
        scope=scope,
        round_selection=selection,
        user_filter_mode=filter_mode,
    )


PRESETS: List[Preset] = [
    Preset(
        name="Personal Best on Hole",
        config=_personal(AccumulationMode.BEST, Scope.HOLE, AllRounds()),
    ),
    Preset(
        name="Personal Best Round",
        config=_personal(AccumulationMode.RELEVANT, Scope.ROUND, BestRound(rank=1)),
    ),
    Preset(
        name="Latest Round Together",
        config=_personal(
            AccumulationMode.RELEVANT,
            Scope.ROUND,
            LatestRounds(count=1),
            UserFilterMode.AND,
        ),
    ),
    Preset(
        name="Personal Best on Hole from Games Together",
        config=_personal(
            AccumulationMode.BEST, Scope.HOLE, AllRounds(), UserFilterMode.AND
        ),
    ),
    Preset(
        name="Personal Best Round from Games Together",
        config=_personal(
            AccumulationMode.BEST, Scope.ROUND, AllRounds(), UserFilterMode.AND
        ),
    ),
    Preset(
        name="Personal Average on Hole",
        config=_personal(AccumulationMode.AVERAGE, Scope.HOLE, AllRounds()),
    ),
    Preset(
        name="Personal Avg of Last 3 Rounds",
        config=_personal(AccumulationMode.AVERAGE, Scope.ROUND, LatestRounds(count=3)),
    ),
    Preset(
        name="Personal Best on Hole of Last 3 Rounds",
        config=_personal(AccumulationMode.BEST, Scope.HOLE, LatestRounds(count=3)),
    ),
    Preset(
        name="Personal Best of Last 3 Rounds",
        config=_personal(AccumulationMode.BEST, Scope.ROUND, LatestRounds(count=3)),
    ),
    Preset(
        name="All Time Avg of Everyone",
        config=CornerConfig(
            score_user_filter=Everyone(),
            round_user_filter=Everyone(),
            accumulation_mode=AccumulationMode.AVERAGE,
            scope=Scope.HOLE,
            round_selection=AllRounds(),
            user_filter_mode=UserFilterMode.OR,
        ),
    ),
]

_BY_NAME: Dict[str, Preset] = {preset.name: preset for preset in PRESETS}


def get_preset(name: str) -> Optional[Preset]:
    return _BY_NAME.get(name)


def _statistic_key(config: CornerConfig) -> dict:
    key = config.model_dump(include=_STATISTIC_FIELDS, mode="json")
    key["round_selection"] = key.get("round_selection") or "all"
    return key


def match_preset(config: CornerConfig) -> str:
    """Name of the preset computing the same statistic, else ``"Custom"``."""

    key = _statistic_key(config)
    for preset in PRESETS:
        if _statistic_key(preset.config) == key:
            return preset.name
    return PRESET_CUSTOM


def default_corner_config() -> CornerConfig:
    preset = _BY_NAME[DEFAULT_PRESET]
    return preset.config.model_copy(
        update={"preset_name": preset.name, "auto_color": True}
    )


__all__ = [
    "DEFAULT_PRESET",
    "PRESETS",
    "PRESET_CUSTOM",
    "Preset",
    "default_corner_config",
    "get_preset",
    "match_preset",
]
