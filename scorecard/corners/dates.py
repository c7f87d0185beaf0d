"""Resolve configured date bounds into concrete datetimes."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Iterable, Optional, Union

from scorecard.rounds.models import PlayerRound

from .schemas import CustomDate, SinceDatePreset, UntilDatePreset


def _local_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None:
        return now.astimezone()
    return now


def ensure_aware(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def _start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def _end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def _shift_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = value.day
    while True:
        try:
            return value.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1


def resolve_since(
    option: Union[SinceDatePreset, CustomDate, None], now: datetime | None = None
) -> Optional[datetime]:
    """Inclusive lower bound, at local start of day for presets."""

    if option is None or option is SinceDatePreset.BEGINNING:
        return None
    if isinstance(option, CustomDate):
        return ensure_aware(option.timestamp)
    current = _local_now(now)
    if option is SinceDatePreset.YEAR_AGO:
        return _start_of_day(_shift_months(current, -12))
    if option is SinceDatePreset.MONTH_AGO:
        return _start_of_day(_shift_months(current, -1))
    raise ValueError(f"unsupported since-date option {option!r}")


def resolve_until(
    option: Union[UntilDatePreset, CustomDate, None], now: datetime | None = None
) -> Optional[datetime]:
    """Inclusive upper bound, at local end of day for presets."""

    if option is None:
        return None
    if isinstance(option, CustomDate):
        return ensure_aware(option.timestamp)
    current = _local_now(now)
    if option is UntilDatePreset.TODAY:
        return _end_of_day(current)
    if option is UntilDatePreset.YESTERDAY:
        return _end_of_day(current - timedelta(days=1))
    raise ValueError(f"unsupported until-date option {option!r}")


def filter_by_dates(
    records: Iterable[PlayerRound],
    since: datetime | None = None,
    until: datetime | None = None,
    exclude_from: datetime | None = None,
) -> list[PlayerRound]:
    """Keep records with ``since <= date <= until`` and ``date < exclude_from``."""

    since = ensure_aware(since)
    until = ensure_aware(until)
    exclude_from = ensure_aware(exclude_from)
    kept: list[PlayerRound] = []
    for record in records:
        if since is not None and record.date < since:
            continue
        if until is not None and record.date > until:
            continue
        if exclude_from is not None and record.date >= exclude_from:
            continue
        kept.append(record)
    return kept


__all__ = ["ensure_aware", "filter_by_dates", "resolve_since", "resolve_until"]
