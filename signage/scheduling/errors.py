from typing import Any


class SchedulingError(Exception):
    code = "SCHEDULING_ERROR"
    status_code = 400
    default_message = "Invalid schedule"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class InvalidTimeRangeError(SchedulingError):
    code = "INVALID_TIME_RANGE"
    default_message = "Invalid time range. Use HH:MM (24-hour)."


class InvalidDateRangeError(SchedulingError):
    code = "INVALID_DATE_RANGE"
    default_message = "Invalid date range. Use YYYY-MM-DD with start_date <= end_date."


class WindowTooShortError(SchedulingError):
    code = "WINDOW_TOO_SHORT"
    default_message = "Schedule window is shorter than the playlist needs."

    def __init__(self, required_min_duration_seconds: int, window_seconds: int | None = None) -> None:
        super().__init__(
            f"Schedule window must be at least {required_min_duration_seconds} seconds "
            f"for this playlist on this display."
        )
        self.required_min_duration_seconds = required_min_duration_seconds
        self.window_seconds = window_seconds

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["required_min_duration_seconds"] = self.required_min_duration_seconds
        payload["window_seconds"] = self.window_seconds
        return payload


class ScheduleConflictError(SchedulingError):
    code = "SCHEDULE_CONFLICT"
    status_code = 409
    default_message = "This schedule overlaps with an existing schedule on the selected display."

    def __init__(self, conflicting_schedule_id: str | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.conflicting_schedule_id = conflicting_schedule_id

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["conflicting_schedule_id"] = self.conflicting_schedule_id
        return payload


class DeviceResolutionMissingError(SchedulingError):
    code = "DEVICE_RESOLUTION_MISSING"
    default_message = "Display has no screen resolution configured; set screen_width and screen_height first."
