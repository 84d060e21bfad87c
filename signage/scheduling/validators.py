import re
from datetime import date

from signage.scheduling.errors import InvalidDateRangeError, InvalidTimeRangeError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Missing bounds behave as an effectively unbounded range.
DEFAULT_START_DATE = "1970-01-01"
DEFAULT_END_DATE = "2099-12-31"


def is_valid_time(value) -> bool:
    if not isinstance(value, str):
        return False
    return TIME_PATTERN.fullmatch(value) is not None


def is_valid_date(value) -> bool:
    if not isinstance(value, str):
        return False
    match = DATE_PATTERN.fullmatch(value)
    if match is None:
        return False
    try:
        date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return False
    return True


def resolve_date_bounds(start_date: str | None, end_date: str | None) -> tuple[str, str]:
    return (start_date or DEFAULT_START_DATE, end_date or DEFAULT_END_DATE)


def validate_window(
    start_date: str | None,
    end_date: str | None,
    start_time: str,
    end_time: str,
) -> None:
    """
    Reject malformed schedule windows.

    Times are checked before dates so a request with both problems reports
    the time error first. Equal start/end times are allowed; such a window
    never plays.
    """
    if not is_valid_time(start_time) or not is_valid_time(end_time):
        raise InvalidTimeRangeError()
    start, end = resolve_date_bounds(start_date, end_date)
    if not is_valid_date(start) or not is_valid_date(end):
        raise InvalidDateRangeError()
    if start > end:
        raise InvalidDateRangeError("start_date must be on or before end_date.")
