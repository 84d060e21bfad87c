from collections.abc import Iterable
from datetime import datetime, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from signage.scheduling.validators import is_valid_time
from signage.scheduling.window import read_field, to_window


def _resolve_zone(tz: str | tzinfo | None) -> tzinfo:
    if tz is None or tz == "" or tz == "UTC":
        return timezone.utc
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {tz}") from exc


def resolve_local_moment(now: datetime, tz: str | tzinfo | None = "UTC") -> tuple[str, int]:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(_resolve_zone(tz))
    return local.date().isoformat(), local.hour * 3600 + local.minute * 60 + local.second


def _created_rank(value: Any) -> float:
    if value is None:
        return float("-inf")
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return float("-inf")
    if not isinstance(value, datetime):
        return float("-inf")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _is_eligible(schedule: Any, local_date: str, second_of_day: int) -> bool:
    if not read_field(schedule, "is_active"):
        return False
    if not is_valid_time(read_field(schedule, "start_time")) or not is_valid_time(read_field(schedule, "end_time")):
        return False
    return to_window(schedule).contains(local_date, second_of_day)


def active_candidates(schedules: Iterable[Any], now: datetime, tz: str | tzinfo | None = "UTC") -> list[Any]:
    """
    Every schedule that may play at ``now``, best first.

    Order is priority descending, then most recently created, then id
    ascending, so equal-priority schedules always resolve the same way.
    """
    local_date, second_of_day = resolve_local_moment(now, tz)
    eligible = [item for item in schedules if _is_eligible(item, local_date, second_of_day)]
    eligible.sort(key=lambda item: str(read_field(item, "id") or ""))
    eligible.sort(
        key=lambda item: (int(read_field(item, "priority") or 0), _created_rank(read_field(item, "created_at"))),
        reverse=True,
    )
    return eligible


def select_active_schedule(schedules: Iterable[Any], now: datetime, tz: str | tzinfo | None = "UTC") -> Any | None:
    candidates = active_candidates(schedules, now, tz)
    return candidates[0] if candidates else None
