"""Sources of player-round records consumed by the corner engine."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from fastapi.concurrency import run_in_threadpool

from scorecard.config import get_settings

from .models import PlayerRound, PlayerRoundRecord

logger = logging.getLogger(__name__)

SAFE_VENUE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class InvalidVenueId(ValueError):
    pass


class PlayerRoundProvider(Protocol):
    async def fetch_player_rounds(
        self,
        venue_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
        exclude_from: datetime | None = None,
    ) -> list[PlayerRound]: ...

    async def expected_hole_count(self, venue_id: str) -> int | None: ...


def _in_window(
    record: PlayerRound,
    since: datetime | None,
    until: datetime | None,
    exclude_from: datetime | None,
) -> bool:
    if since is not None and record.date < since:
        return False
    if until is not None and record.date > until:
        return False
    if exclude_from is not None and record.date >= exclude_from:
        return False
    return True


class InMemoryRoundProvider:
    """Serve records from a snapshot held in memory."""

    def __init__(
        self,
        records: Iterable[PlayerRound] = (),
        hole_counts: Mapping[str, int] | None = None,
    ) -> None:
        self._records = list(records)
        self._hole_counts = dict(hole_counts or {})

    async def fetch_player_rounds(
        self,
        venue_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
        exclude_from: datetime | None = None,
    ) -> list[PlayerRound]:
        return [
            record
            for record in self._records
            if record.round.venue_id == venue_id
            and _in_window(record, since, until, exclude_from)
        ]

    async def expected_hole_count(self, venue_id: str) -> int | None:
        return self._hole_counts.get(venue_id)


def _sanitize_venue_id(venue_id: str) -> str:
    """Only allow ASCII letters, digits, underscores, and dashes."""

    if not SAFE_VENUE_ID_RE.match(venue_id):
        raise InvalidVenueId(f"Invalid venue_id for filesystem usage: {venue_id!r}")
    return venue_id


class FileRoundProvider:
    """Read player rounds stored as ``<base>/<venue>/<round>-<player>.json``.

    A ``venue.json`` file next to the rounds may carry the venue's hole
    catalogue (``{"holes": 18}`` or ``{"holes": [1, 2, ...]}``).
    """

    def __init__(self, base_dir: Path | str | None = None):
        base = Path(base_dir or get_settings().rounds_dir).expanduser()
        self._base_dir = base.resolve()

    def _venue_dir(self, venue_id: str) -> Path:
        return self._base_dir / _sanitize_venue_id(venue_id)

    def write_player_round(self, record: PlayerRound) -> Path:
        venue_dir = self._venue_dir(record.round.venue_id)
        venue_dir.mkdir(parents=True, exist_ok=True)
        path = venue_dir / f"{record.round_id}-{record.player_id}.json"
        payload = PlayerRoundRecord.from_player_round(record).to_dict()
        path.write_text(json.dumps(payload, indent=2))
        return path

    def _read_records(self, venue_id: str) -> list[PlayerRound]:
        venue_dir = self._venue_dir(venue_id)
        if not venue_dir.exists():
            return []

        records: list[PlayerRound] = []
        for path in sorted(venue_dir.glob("*.json")):
            if path.name == "venue.json":
                continue
            try:
                data = json.loads(path.read_text())
                records.append(PlayerRoundRecord.from_dict(data).to_player_round())
            except Exception:
                logger.warning("skipping unreadable player round %s", path, exc_info=True)
                continue
        return records

    async def fetch_player_rounds(
        self,
        venue_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
        exclude_from: datetime | None = None,
    ) -> list[PlayerRound]:
        records = await run_in_threadpool(self._read_records, venue_id)
        return [
            record for record in records if _in_window(record, since, until, exclude_from)
        ]

    def _read_hole_count(self, venue_id: str) -> int | None:
        meta_path = self._venue_dir(venue_id) / "venue.json"
        if not meta_path.exists():
            return None
        try:
            holes = json.loads(meta_path.read_text()).get("holes")
        except Exception:
            logger.warning("unreadable venue catalogue %s", meta_path, exc_info=True)
            return None
        if isinstance(holes, list):
            return len(set(holes)) or None
        if isinstance(holes, int) and not isinstance(holes, bool) and holes > 0:
            return holes
        return None

    async def expected_hole_count(self, venue_id: str) -> int | None:
        return await run_in_threadpool(self._read_hole_count, venue_id)


@lru_cache(maxsize=1)
def get_round_provider() -> PlayerRoundProvider:
    return FileRoundProvider()


__all__ = [
    "FileRoundProvider",
    "InMemoryRoundProvider",
    "InvalidVenueId",
    "PlayerRoundProvider",
    "get_round_provider",
]
