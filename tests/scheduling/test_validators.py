import pytest

from signage.scheduling.errors import InvalidDateRangeError, InvalidTimeRangeError
from signage.scheduling.validators import (
    DEFAULT_END_DATE,
    DEFAULT_START_DATE,
    is_valid_date,
    is_valid_time,
    resolve_date_bounds,
    validate_window,
)


class TestTimeFormat:
    @pytest.mark.parametrize("value", ["00:00", "08:30", "12:00", "19:59", "23:59"])
    def test_accepts_24_hour_times(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize(
        "value",
        ["24:00", "8:30", "08:60", "08:5", "0830", " 08:30", "08:30 ", "08:30:00", "", None, 830],
    )
    def test_rejects_malformed_times(self, value):
        assert not is_valid_time(value)


class TestDateFormat:
    @pytest.mark.parametrize("value", ["2026-01-01", "2024-02-29", "2099-12-31"])
    def test_accepts_calendar_dates(self, value):
        assert is_valid_date(value)

    @pytest.mark.parametrize(
        "value",
        ["2025-02-29", "2026-13-01", "2026-04-31", "2026-1-01", "26-01-01", "2026/01/01", "", None],
    )
    def test_rejects_impossible_or_malformed_dates(self, value):
        assert not is_valid_date(value)


class TestValidateWindow:
    def test_missing_dates_resolve_to_open_bounds(self):
        assert resolve_date_bounds(None, None) == (DEFAULT_START_DATE, DEFAULT_END_DATE)
        assert resolve_date_bounds("2026-03-01", None) == ("2026-03-01", DEFAULT_END_DATE)

    def test_accepts_midnight_crossing_and_equal_times(self):
        validate_window("2026-01-01", "2026-01-31", "22:00", "02:00")
        validate_window(None, None, "08:00", "08:00")

    def test_single_day_range_is_valid(self):
        validate_window("2026-05-05", "2026-05-05", "08:00", "09:00")

    def test_bad_time_raises_invalid_time_range(self):
        with pytest.raises(InvalidTimeRangeError) as exc_info:
            validate_window(None, None, "25:00", "09:00")
        assert exc_info.value.code == "INVALID_TIME_RANGE"
        assert exc_info.value.status_code == 400

    def test_time_error_is_reported_before_date_error(self):
        with pytest.raises(InvalidTimeRangeError):
            validate_window("2026-02-30", "2026-01-01", "8:00", "09:00")

    def test_reversed_dates_raise_invalid_date_range(self):
        with pytest.raises(InvalidDateRangeError):
            validate_window("2026-02-01", "2026-01-31", "08:00", "09:00")

    def test_impossible_date_raises_invalid_date_range(self):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            validate_window("2026-02-30", None, "08:00", "09:00")
        assert exc_info.value.to_payload()["code"] == "INVALID_DATE_RANGE"
