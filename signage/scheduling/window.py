from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from signage.scheduling.validators import resolve_date_bounds

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class DailySegment:
    """Half-open ``[start, end)`` second range within one day."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, second_of_day: int) -> bool:
        return self.start <= second_of_day < self.end


@dataclass(frozen=True)
class Window:
    start_date: str
    end_date: str
    segments: tuple[DailySegment, ...] = field(default_factory=tuple)
    id: str | None = None
    display_id: str | None = None

    @property
    def duration_seconds(self) -> int:
        return sum(segment.length for segment in self.segments)

    def covers_date(self, local_date: str) -> bool:
        return self.start_date <= local_date <= self.end_date

    def contains(self, local_date: str, second_of_day: int) -> bool:
        if not self.covers_date(local_date):
            return False
        return any(segment.contains(second_of_day) for segment in self.segments)


def read_field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def time_to_seconds(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 3600 + int(minutes) * 60


def to_daily_segments(start_time: str, end_time: str) -> list[DailySegment]:
    start = time_to_seconds(start_time)
    end = time_to_seconds(end_time)
    if start == end:
        return []
    if start < end:
        return [DailySegment(start, end)]
    # Crosses midnight: tail of the day plus head of the next.
    return [DailySegment(start, SECONDS_PER_DAY), DailySegment(0, end)]


def window_seconds(start_time: str, end_time: str) -> int:
    return sum(segment.length for segment in to_daily_segments(start_time, end_time))


def to_window(schedule: Any) -> Window:
    start_date, end_date = resolve_date_bounds(read_field(schedule, "start_date"), read_field(schedule, "end_date"))
    segments = to_daily_segments(read_field(schedule, "start_time"), read_field(schedule, "end_time"))
    schedule_id = read_field(schedule, "id")
    display_id = read_field(schedule, "display_id")
    return Window(
        start_date=start_date,
        end_date=end_date,
        segments=tuple(segments),
        id=str(schedule_id) if schedule_id is not None else None,
        display_id=str(display_id) if display_id is not None else None,
    )
