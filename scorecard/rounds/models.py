from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RoundInfo(BaseModel):
    id: str
    venue_id: str = Field(
        validation_alias=AliasChoices("venue_id", "venueId"),
        serialization_alias="venueId",
    )
    date: datetime

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("date")
    @classmethod
    def _ensure_tz(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Player(BaseModel):
    id: str
    name: str = ""

    model_config = ConfigDict(frozen=True)


class Score(BaseModel):
    hole_number: int = Field(
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    value: int = 0
    complete: bool = False

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PlayerRound(BaseModel):
    """One player's scores for one played round."""

    round: RoundInfo
    player: Player
    scores: List[Score] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def round_id(self) -> str:
        return self.round.id

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def date(self) -> datetime:
        return self.round.date

    def distinct_holes(self) -> set[int]:
        return {score.hole_number for score in self.scores}

    def completed_holes(self) -> set[int]:
        return {score.hole_number for score in self.scores if score.complete}

    def hole_value(self, hole_number: int) -> int | None:
        for score in self.scores:
            if score.hole_number == hole_number and score.complete:
                return score.value
        return None

    def round_total(self) -> int:
        return sum(score.value for score in self.scores if score.complete)

    def is_complete(self, expected_hole_count: int) -> bool:
        if not self.scores:
            return False
        return len(self.completed_holes()) >= expected_hole_count


@dataclass
class PlayerRoundRecord:
    round_id: str
    venue_id: str
    date: datetime
    player_id: str
    player_name: str = ""
    scores: list[dict] = field(default_factory=list)

    def to_player_round(self) -> PlayerRound:
        return PlayerRound(
            round=RoundInfo(id=self.round_id, venue_id=self.venue_id, date=self.date),
            player=Player(id=self.player_id, name=self.player_name),
            scores=[Score.model_validate(item) for item in self.scores],
        )

    def to_dict(self) -> dict:
        return {
            "round_id": self.round_id,
            "venue_id": self.venue_id,
            "date": self.date.isoformat(),
            "player_id": self.player_id,
            "player_name": self.player_name,
            "scores": list(self.scores),
        }

    @staticmethod
    def from_dict(data: dict) -> "PlayerRoundRecord":
        return PlayerRoundRecord(
            round_id=str(data["round_id"]),
            venue_id=str(data["venue_id"]),
            date=_parse_dt(data["date"]),
            player_id=str(data["player_id"]),
            player_name=str(data.get("player_name") or ""),
            scores=[dict(item) for item in data.get("scores") or []],
        )

    @staticmethod
    def from_player_round(record: PlayerRound) -> "PlayerRoundRecord":
        return PlayerRoundRecord(
            round_id=record.round.id,
            venue_id=record.round.venue_id,
            date=record.round.date,
            player_id=record.player.id,
            player_name=record.player.name,
            scores=[
                {
                    "hole_number": score.hole_number,
                    "value": score.value,
                    "complete": score.complete,
                }
                for score in record.scores
            ],
        )


def _parse_dt(value: str | int | float) -> datetime:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def group_by_round(records: list[PlayerRound]) -> dict[str, list[PlayerRound]]:
    """Group records by round id, keeping first-seen round order."""

    grouped: dict[str, list[PlayerRound]] = {}
    for record in records:
        grouped.setdefault(record.round_id, []).append(record)
    return grouped


def find_record(
    records: Sequence[PlayerRound], player_id: str
) -> Optional[PlayerRound]:
    for record in records:
        if record.player_id == player_id:
            return record
    return None


__all__ = [
    "Player",
    "PlayerRound",
    "PlayerRoundRecord",
    "RoundInfo",
    "Score",
    "find_record",
    "group_by_round",
]
