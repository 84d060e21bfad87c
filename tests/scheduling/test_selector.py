from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from signage.scheduling.selector import active_candidates, resolve_local_moment, select_active_schedule

CREATED = datetime(2025, 12, 1, tzinfo=timezone.utc)


def make_schedule(id, **overrides):
    fields = {
        "id": id,
        "display_id": "lobby",
        "start_date": "2026-01-01",
        "end_date": "2026-01-31",
        "start_time": "08:00",
        "end_time": "17:00",
        "priority": 0,
        "is_active": True,
        "created_at": CREATED,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def at(hour, minute=0, day=15):
    return datetime(2026, 1, day, hour, minute, tzinfo=timezone.utc)


class TestResolveLocalMoment:
    def test_utc(self):
        assert resolve_local_moment(at(10, 30), "UTC") == ("2026-01-15", 37800)

    def test_naive_datetime_is_treated_as_utc(self):
        assert resolve_local_moment(datetime(2026, 1, 15, 10, 30), "UTC") == ("2026-01-15", 37800)

    def test_named_zone_can_change_the_date(self):
        assert resolve_local_moment(at(3, 30), "America/New_York") == ("2026-01-14", 81000)

    def test_unknown_zone_raises(self):
        with pytest.raises(ValueError):
            resolve_local_moment(at(10), "Mars/Olympus_Mons")


class TestSelectActiveSchedule:
    """Which schedule a display should be playing at a given instant."""

    def test_highest_priority_wins(self):
        schedules = [
            make_schedule("s1", priority=5),
            make_schedule("s2", priority=10),
            make_schedule("s3", priority=10, start_time="09:00", end_time="12:00"),
        ]
        assert select_active_schedule(schedules, at(10)).priority == 10

    def test_no_match_returns_none(self):
        assert select_active_schedule([make_schedule("s1")], at(20)) is None
        assert select_active_schedule([], at(10)) is None

    def test_start_is_inclusive_and_end_exclusive(self):
        schedule = make_schedule("s1")
        assert select_active_schedule([schedule], at(8)) is schedule
        assert select_active_schedule([schedule], at(17)) is None

    def test_outside_date_range_is_ignored(self):
        schedule = make_schedule("s1")
        assert select_active_schedule([schedule], at(10, day=1)) is schedule
        assert select_active_schedule([schedule], datetime(2026, 2, 1, 10, tzinfo=timezone.utc)) is None

    def test_inactive_schedule_never_plays(self):
        assert select_active_schedule([make_schedule("s1", is_active=False)], at(10)) is None

    def test_overnight_window_plays_after_midnight(self):
        overnight = make_schedule("s1", start_time="22:00", end_time="02:00")
        assert select_active_schedule([overnight], at(1)) is overnight
        assert select_active_schedule([overnight], at(23)) is overnight
        assert select_active_schedule([overnight], at(2)) is None

    def test_zero_length_window_never_plays(self):
        empty = make_schedule("s1", start_time="08:00", end_time="08:00")
        assert select_active_schedule([empty], at(8)) is None

    def test_malformed_times_are_skipped(self):
        broken = make_schedule("s1", start_time="8am")
        assert select_active_schedule([broken], at(10)) is None

    def test_evaluates_in_requested_timezone(self):
        new_york_evening = make_schedule("ny", start_date="2026-01-14", end_date="2026-01-14", start_time="22:00", end_time="23:00")
        utc_night = make_schedule("utc", start_date="2026-01-15", end_date="2026-01-15", start_time="03:00", end_time="04:00")
        now = at(3, 30)
        assert select_active_schedule([new_york_evening, utc_night], now, "America/New_York") is new_york_evening
        assert select_active_schedule([new_york_evening, utc_night], now, "UTC") is utc_night

    def test_tie_prefers_most_recently_created(self):
        older = make_schedule("a", priority=10)
        newer = make_schedule("b", priority=10, created_at=CREATED + timedelta(days=1))
        assert select_active_schedule([older, newer], at(10)) is newer

    def test_full_tie_prefers_lowest_id(self):
        """Same priority and creation time: lowest id wins regardless of input order."""
        first = make_schedule("a", priority=10)
        second = make_schedule("b", priority=10)
        assert select_active_schedule([second, first], at(10)) is first

    def test_order_of_input_does_not_matter(self):
        schedules = [
            make_schedule("c", priority=1),
            make_schedule("a", priority=3, created_at=None),
            make_schedule("b", priority=3),
        ]
        ranked = [item.id for item in active_candidates(schedules, at(10))]
        assert ranked == ["b", "a", "c"]
        assert [item.id for item in active_candidates(list(reversed(schedules)), at(10))] == ranked

    def test_accepts_mappings(self):
        schedule = {
            "id": "m1",
            "start_time": "08:00",
            "end_time": "17:00",
            "priority": 0,
            "is_active": True,
        }
        assert select_active_schedule([schedule], at(12)) is schedule

    def test_plain_date_created_at_ranks_as_oldest(self):
        dated = make_schedule("a", priority=10, created_at=date(2026, 1, 1))
        stamped = make_schedule("b", priority=10)
        assert select_active_schedule([dated, stamped], at(10)) is stamped
