import pytest

from signage.scheduling.validators import DEFAULT_END_DATE, DEFAULT_START_DATE
from signage.scheduling.window import (
    SECONDS_PER_DAY,
    DailySegment,
    Window,
    time_to_seconds,
    to_daily_segments,
    to_window,
    window_seconds,
)


class TestDailySegments:
    def test_time_to_seconds(self):
        assert time_to_seconds("00:00") == 0
        assert time_to_seconds("08:30") == 30600
        assert time_to_seconds("23:59") == 86340

    def test_same_day_window_is_one_segment(self):
        assert to_daily_segments("08:00", "17:00") == [DailySegment(28800, 61200)]

    def test_midnight_crossing_window_splits_in_two(self):
        assert to_daily_segments("22:00", "02:00") == [
            DailySegment(79200, SECONDS_PER_DAY),
            DailySegment(0, 7200),
        ]

    def test_equal_times_produce_no_segments(self):
        assert to_daily_segments("08:00", "08:00") == []
        assert window_seconds("08:00", "08:00") == 0

    @pytest.mark.parametrize(
        "start_time,end_time",
        [("08:00", "17:00"), ("17:00", "08:00"), ("00:00", "23:59"), ("23:59", "00:00"), ("12:30", "12:31")],
    )
    def test_duration_matches_clock_span(self, start_time, end_time):
        span = (time_to_seconds(end_time) - time_to_seconds(start_time)) % SECONDS_PER_DAY
        assert window_seconds(start_time, end_time) == span

    def test_segment_is_half_open(self):
        segment = DailySegment(100, 200)
        assert segment.contains(100)
        assert segment.contains(199)
        assert not segment.contains(200)
        assert segment.length == 100


class TestToWindow:
    def test_reads_mapping(self):
        window = to_window(
            {
                "id": 7,
                "display_id": "d-1",
                "start_date": "2026-01-01",
                "end_date": "2026-01-31",
                "start_time": "17:00",
                "end_time": "08:00",
            }
        )
        assert window.id == "7"
        assert window.display_id == "d-1"
        assert window.start_date == "2026-01-01"
        assert window.duration_seconds == 15 * 3600

    def test_missing_dates_become_open_range(self):
        window = to_window({"start_time": "08:00", "end_time": "09:00"})
        assert (window.start_date, window.end_date) == (DEFAULT_START_DATE, DEFAULT_END_DATE)
        assert window.id is None

    def test_contains_checks_date_and_time(self):
        window = Window("2026-01-01", "2026-01-31", (DailySegment(28800, 61200),))
        assert window.contains("2026-01-31", 28800)
        assert not window.contains("2026-02-01", 28800)
        assert not window.contains("2026-01-15", 61200)

    def test_empty_window_contains_nothing(self):
        window = Window("2026-01-01", "2026-01-31", ())
        assert window.duration_seconds == 0
        assert not window.contains("2026-01-15", 0)
