"""Pydantic models describing corner statistic configuration and results.

User filters, round selections and custom dates are tagged variants. On the
wire they keep the compact encodings the scorecard app persists (``"everyone"``,
``["p1", "p2"]``, ``"bestRounds2"``, ``{"type": "specific", "roundIds": [...]}``)
so stored configuration round-trips unchanged.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_serializer,
    model_validator,
)


class AccumulationMode(str, Enum):
    BEST = "best"
    WORST = "worst"
    AVERAGE = "average"
    LATEST = "latest"
    FIRST = "first"
    PERCENTILE = "percentile"
    RELEVANT = "relevant"


class Scope(str, Enum):
    HOLE = "hole"
    ROUND = "round"


class UserFilterMode(str, Enum):
    AND = "and"
    OR = "or"


class CornerPosition(str, Enum):
    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_RIGHT = "bottomRight"


class _Variant(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# User filters


class Everyone(_Variant):
    kind: Literal["everyone"] = "everyone"

    @model_serializer
    def _wire(self) -> str:
        return "everyone"


class EachUser(_Variant):
    kind: Literal["eachUser"] = "eachUser"

    @model_serializer
    def _wire(self) -> str:
        return "eachUser"


class TodaysPlayers(_Variant):
    kind: Literal["todaysPlayers"] = "todaysPlayers"

    @model_serializer
    def _wire(self) -> str:
        return "todaysPlayers"


class ExplicitIds(_Variant):
    kind: Literal["ids"] = "ids"
    ids: Tuple[str, ...] = ()

    @model_serializer
    def _wire(self) -> list[str]:
        return list(self.ids)


UserFilter = Union[Everyone, EachUser, TodaysPlayers, ExplicitIds]

_NAMED_USER_FILTERS: Dict[str, type] = {
    "everyone": Everyone,
    "eachUser": EachUser,
    "todaysPlayers": TodaysPlayers,
}


def parse_user_filter(value: Any) -> UserFilter:
    if isinstance(value, (Everyone, EachUser, TodaysPlayers, ExplicitIds)):
        return value
    if isinstance(value, str):
        variant = _NAMED_USER_FILTERS.get(value)
        if variant is None:
            raise ValueError(f"unknown user filter {value!r}")
        return variant()
    if isinstance(value, (list, tuple)):
        return ExplicitIds(ids=tuple(str(item) for item in value))
    if isinstance(value, Mapping):
        kind = value.get("kind")
        if kind == "ids":
            return ExplicitIds(ids=tuple(str(item) for item in value.get("ids") or ()))
        if kind in _NAMED_USER_FILTERS:
            return _NAMED_USER_FILTERS[kind]()
    raise ValueError(f"unsupported user filter {value!r}")


# Which rounds are eligible, based on who played in them.
RoundEligibility = Annotated[UserFilter, BeforeValidator(parse_user_filter)]
# Whose scores are read from the eligible rounds.
ScoreEligibility = Annotated[UserFilter, BeforeValidator(parse_user_filter)]


# Round selections


class AllRounds(_Variant):
    kind: Literal["all"] = "all"

    @model_serializer
    def _wire(self) -> str:
        return "all"


class LatestRounds(_Variant):
    kind: Literal["latest"] = "latest"
    count: Literal[1, 2, 3] = 1

    @model_serializer
    def _wire(self) -> str:
        return "latest" if self.count == 1 else f"latest{self.count}"


class FirstRound(_Variant):
    kind: Literal["first"] = "first"

    @model_serializer
    def _wire(self) -> str:
        return "first"


class BestRound(_Variant):
    kind: Literal["bestRound"] = "bestRound"
    rank: Literal[1, 2] = 1

    @model_serializer
    def _wire(self) -> str:
        return "bestRound" if self.rank == 1 else f"bestRound{self.rank}"


class BestRounds(_Variant):
    kind: Literal["bestRounds"] = "bestRounds"
    count: Literal[2, 3] = 2

    @model_serializer
    def _wire(self) -> str:
        return f"bestRounds{self.count}"


class WorstRound(_Variant):
    kind: Literal["worstRound"] = "worstRound"
    rank: Literal[1, 2] = 1

    @model_serializer
    def _wire(self) -> str:
        return "worstRound" if self.rank == 1 else f"worstRound{self.rank}"


class WorstRounds(_Variant):
    kind: Literal["worstRounds"] = "worstRounds"
    count: Literal[2, 3] = 2

    @model_serializer
    def _wire(self) -> str:
        return f"worstRounds{self.count}"


class SpecificRounds(_Variant):
    kind: Literal["specific"] = "specific"
    round_ids: Tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("round_ids", "roundIds")
    )

    @model_serializer
    def _wire(self) -> dict[str, Any]:
        return {"type": "specific", "roundIds": list(self.round_ids)}


RoundSelection = Union[
    AllRounds,
    LatestRounds,
    FirstRound,
    BestRound,
    BestRounds,
    WorstRound,
    WorstRounds,
    SpecificRounds,
]

_NAMED_SELECTIONS: Dict[str, RoundSelection] = {
    "all": AllRounds(),
    "latest": LatestRounds(count=1),
    "latest2": LatestRounds(count=2),
    "latest3": LatestRounds(count=3),
    "first": FirstRound(),
    "bestRound": BestRound(rank=1),
    "bestRound2": BestRound(rank=2),
    "bestRounds2": BestRounds(count=2),
    "bestRounds3": BestRounds(count=3),
    "worstRound": WorstRound(rank=1),
    "worstRound2": WorstRound(rank=2),
    "worstRounds2": WorstRounds(count=2),
    "worstRounds3": WorstRounds(count=3),
}

_SELECTION_TYPES = (
    AllRounds,
    LatestRounds,
    FirstRound,
    BestRound,
    BestRounds,
    WorstRound,
    WorstRounds,
    SpecificRounds,
)


def parse_round_selection(value: Any) -> RoundSelection:
    if isinstance(value, _SELECTION_TYPES):
        return value
    if isinstance(value, str):
        selection = _NAMED_SELECTIONS.get(value)
        if selection is None:
            raise ValueError(f"unknown round selection {value!r}")
        return selection
    if isinstance(value, Mapping):
        kind = value.get("type", value.get("kind"))
        if kind == "specific":
            return SpecificRounds.model_validate(value)
        for variant in _SELECTION_TYPES:
            if variant.model_fields["kind"].default == kind:
                return variant.model_validate(value)
    raise ValueError(f"unsupported round selection {value!r}")


RoundSelectionField = Annotated[RoundSelection, BeforeValidator(parse_round_selection)]


# Date bounds


class SinceDatePreset(str, Enum):
    BEGINNING = "beginning"
    YEAR_AGO = "yearAgo"
    MONTH_AGO = "monthAgo"


class UntilDatePreset(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"


class CustomDate(_Variant):
    """An explicit bound, already normalised to local start/end of day."""

    timestamp: datetime

    @model_validator(mode="before")
    @classmethod
    def _from_epoch_ms(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            raw = data.get("timestamp")
            if isinstance(raw, (int, float)) and not isinstance(raw, bool):
                return {
                    "timestamp": datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
                }
        return data

    @model_serializer
    def _wire(self) -> dict[str, Any]:
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return {"type": "custom", "timestamp": int(timestamp.timestamp() * 1000)}


def _date_option_parser(preset: type[Enum]):
    def parse(value: Any) -> Any:
        if isinstance(value, (preset, CustomDate)):
            return value
        if isinstance(value, str):
            return preset(value)
        if isinstance(value, datetime):
            return CustomDate(timestamp=value)
        if isinstance(value, Mapping) and value.get("type", "custom") == "custom":
            return CustomDate.model_validate(value)
        raise ValueError(f"unsupported date option {value!r}")

    return parse


SinceDateOption = Annotated[
    Union[SinceDatePreset, CustomDate],
    BeforeValidator(_date_option_parser(SinceDatePreset)),
]
UntilDateOption = Annotated[
    Union[UntilDatePreset, CustomDate],
    BeforeValidator(_date_option_parser(UntilDatePreset)),
]


# Corner configuration


class CornerConfig(BaseModel):
    score_user_filter: ScoreEligibility = Field(
        validation_alias=AliasChoices("score_user_filter", "scoreUserFilter"),
        serialization_alias="scoreUserFilter",
    )
    round_user_filter: RoundEligibility = Field(
        validation_alias=AliasChoices("round_user_filter", "roundUserFilter"),
        serialization_alias="roundUserFilter",
    )
    user_filter_mode: UserFilterMode = Field(
        default=UserFilterMode.OR,
        validation_alias=AliasChoices("user_filter_mode", "userFilterMode"),
        serialization_alias="userFilterMode",
    )
    accumulation_mode: AccumulationMode = Field(
        validation_alias=AliasChoices("accumulation_mode", "accumulationMode"),
        serialization_alias="accumulationMode",
    )
    scope: Scope
    round_selection: Optional[RoundSelectionField] = Field(
        default=None,
        validation_alias=AliasChoices("round_selection", "roundSelection"),
        serialization_alias="roundSelection",
    )
    percentile: Optional[int] = Field(default=None, ge=0, le=99)
    since_date: Optional[SinceDateOption] = Field(
        default=None,
        validation_alias=AliasChoices("since_date", "sinceDate"),
        serialization_alias="sinceDate",
    )
    until_date: Optional[UntilDateOption] = Field(
        default=None,
        validation_alias=AliasChoices("until_date", "untilDate"),
        serialization_alias="untilDate",
    )
    preset_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("preset_name", "presetName"),
        serialization_alias="presetName",
    )
    auto_color: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("auto_color", "autoColor"),
        serialization_alias="autoColor",
    )
    custom_color: Optional[str] = Field(
        default=None,
        pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$",
        validation_alias=AliasChoices("custom_color", "customColor"),
        serialization_alias="customColor",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_unused_percentile(cls, data: Any) -> Any:
        # a percentile only means something in percentile mode
        if isinstance(data, Mapping) and "percentile" in data:
            mode = data.get("accumulation_mode", data.get("accumulationMode"))
            if mode != AccumulationMode.PERCENTILE:
                return {key: value for key, value in data.items() if key != "percentile"}
        return data

    @model_validator(mode="after")
    def _require_percentile(self) -> "CornerConfig":
        if self.accumulation_mode is AccumulationMode.PERCENTILE and self.percentile is None:
            raise ValueError("percentile is required when accumulationMode is 'percentile'")
        return self

    @property
    def selection(self) -> RoundSelection:
        """Round selection with the implicit default applied."""

        return self.round_selection if self.round_selection is not None else AllRounds()

    @property
    def picks_one_round_per_player(self) -> bool:
        return self.accumulation_mode in (AccumulationMode.LATEST, AccumulationMode.FIRST)


class CornerStatisticsConfig(BaseModel):
    top_left: Optional[CornerConfig] = Field(
        default=None,
        validation_alias=AliasChoices("top_left", "topLeft"),
        serialization_alias="topLeft",
    )
    top_right: Optional[CornerConfig] = Field(
        default=None,
        validation_alias=AliasChoices("top_right", "topRight"),
        serialization_alias="topRight",
    )
    bottom_left: Optional[CornerConfig] = Field(
        default=None,
        validation_alias=AliasChoices("bottom_left", "bottomLeft"),
        serialization_alias="bottomLeft",
    )
    bottom_right: Optional[CornerConfig] = Field(
        default=None,
        validation_alias=AliasChoices("bottom_right", "bottomRight"),
        serialization_alias="bottomRight",
    )

    model_config = ConfigDict(populate_by_name=True)

    def by_position(self) -> Dict[CornerPosition, Optional[CornerConfig]]:
        return {
            CornerPosition.TOP_LEFT: self.top_left,
            CornerPosition.TOP_RIGHT: self.top_right,
            CornerPosition.BOTTOM_LEFT: self.bottom_left,
            CornerPosition.BOTTOM_RIGHT: self.bottom_right,
        }


# Results


class CornerValue(BaseModel):
    value: Union[int, float, str] = ""
    visible: bool = False

    @classmethod
    def hidden(cls) -> "CornerValue":
        return cls(value="", visible=False)

    @classmethod
    def shown(cls, value: int | float) -> "CornerValue":
        return cls(value=value, visible=True)


class CellCornerValues(BaseModel):
    top_left: CornerValue = Field(
        default_factory=CornerValue.hidden, serialization_alias="topLeft"
    )
    top_right: CornerValue = Field(
        default_factory=CornerValue.hidden, serialization_alias="topRight"
    )
    bottom_left: CornerValue = Field(
        default_factory=CornerValue.hidden, serialization_alias="bottomLeft"
    )
    bottom_right: CornerValue = Field(
        default_factory=CornerValue.hidden, serialization_alias="bottomRight"
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_positions(
        cls, values: Mapping[CornerPosition, CornerValue]
    ) -> "CellCornerValues":
        return cls(
            top_left=values.get(CornerPosition.TOP_LEFT, CornerValue.hidden()),
            top_right=values.get(CornerPosition.TOP_RIGHT, CornerValue.hidden()),
            bottom_left=values.get(CornerPosition.BOTTOM_LEFT, CornerValue.hidden()),
            bottom_right=values.get(CornerPosition.BOTTOM_RIGHT, CornerValue.hidden()),
        )

    def get(self, position: CornerPosition) -> CornerValue:
        return {
            CornerPosition.TOP_LEFT: self.top_left,
            CornerPosition.TOP_RIGHT: self.top_right,
            CornerPosition.BOTTOM_LEFT: self.bottom_left,
            CornerPosition.BOTTOM_RIGHT: self.bottom_right,
        }[position]


__all__ = [
    "AccumulationMode",
    "AllRounds",
    "BestRound",
    "BestRounds",
    "CellCornerValues",
    "CornerConfig",
    "CornerPosition",
    "CornerStatisticsConfig",
    "CornerValue",
    "CustomDate",
    "EachUser",
    "Everyone",
    "ExplicitIds",
    "FirstRound",
    "LatestRounds",
    "RoundEligibility",
    "RoundSelection",
    "Scope",
    "ScoreEligibility",
    "SinceDatePreset",
    "SpecificRounds",
    "TodaysPlayers",
    "UntilDatePreset",
    "UserFilter",
    "UserFilterMode",
    "WorstRound",
    "WorstRounds",
    "parse_round_selection",
    "parse_user_filter",
]
