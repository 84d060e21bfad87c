import logging
from collections.abc import Collection, Iterable
from itertools import product

from signage.scheduling.errors import ScheduleConflictError
from signage.scheduling.window import DailySegment, Window

logger = logging.getLogger(__name__)


def segments_overlap(a: DailySegment, b: DailySegment) -> bool:
    return a.start < b.end and b.start < a.end


def date_ranges_overlap(left: Window, right: Window) -> bool:
    # ISO dates are fixed width, so string order is calendar order.
    return left.start_date <= right.end_date and right.start_date <= left.end_date


def windows_conflict(left: Window, right: Window) -> bool:
    """
    Two windows conflict when they target the same display and intersect in
    both date range and time of day.

    Midnight-crossing windows carry two segments, so every segment pair is
    compared; a window without segments can never conflict.
    """
    if left.display_id != right.display_id:
        return False
    if not date_ranges_overlap(left, right):
        return False
    return any(segments_overlap(a, b) for a, b in product(left.segments, right.segments))


def find_conflicts(
    candidate: Window,
    existing: Iterable[Window],
    exclude_ids: Collection[str] = (),
) -> list[Window]:
    excluded = {str(item) for item in exclude_ids}
    return [
        window
        for window in existing
        if window.id not in excluded and windows_conflict(candidate, window)
    ]


def ensure_no_conflicts(
    candidate: Window,
    existing: Iterable[Window],
    exclude_ids: Collection[str] = (),
) -> None:
    excluded = {str(item) for item in exclude_ids}
    for window in existing:
        if window.id is not None and window.id in excluded:
            continue
        if windows_conflict(candidate, window):
            logger.info(
                "Schedule window %s..%s on display %s overlaps schedule %s",
                candidate.start_date,
                candidate.end_date,
                candidate.display_id,
                window.id,
            )
            raise ScheduleConflictError(conflicting_schedule_id=window.id)


check_for_conflicts = ensure_no_conflicts
