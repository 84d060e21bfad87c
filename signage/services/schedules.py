import logging
import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from signage.config import SCHEDULE_TIMEZONE
from signage.models.content import Content
from signage.models.display import Display
from signage.models.playlist import PLAYLIST_DRAFT, PLAYLIST_IN_USE, Playlist, PlaylistItem
from signage.models.schedule import Schedule
from signage.scheduling.conflicts import ensure_no_conflicts
from signage.scheduling.duration import (
    PlaybackItem,
    compute_required_min_duration_seconds,
    ensure_device_resolution,
    ensure_window_long_enough,
)
from signage.scheduling.selector import select_active_schedule
from signage.scheduling.validators import validate_window
from signage.scheduling.window import to_window, window_seconds
from signage.services.errors import NotFoundError
from signage.services.settings import get_scroll_px_per_second

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

_display_locks: dict[str, threading.Lock] = {}
_display_locks_guard = threading.Lock()


@contextmanager
def display_lock(display_id: str) -> Iterator[None]:
    """
    Serialize the load-check-write sequence for one display.

    Only guards writers inside this process; a multi-worker deployment needs
    a database-level lock around the same sequence.
    """
    with _display_locks_guard:
        lock = _display_locks.setdefault(str(display_id), threading.Lock())
    with lock:
        yield


def _require_display(db: Session, display_id: str) -> Display:
    display = db.get(Display, display_id)
    if not display:
        raise NotFoundError("Display not found")
    return display


def _require_playlist(db: Session, playlist_id: str) -> Playlist:
    playlist = db.get(Playlist, playlist_id)
    if not playlist:
        raise NotFoundError("Playlist not found")
    return playlist


def _require_schedule(db: Session, schedule_id: str) -> Schedule:
    schedule = db.get(Schedule, schedule_id)
    if not schedule:
        raise NotFoundError("Schedule not found")
    return schedule


def playback_items(db: Session, playlist_id: str) -> list[PlaybackItem]:
    items = (
        db.query(PlaylistItem)
        .filter(PlaylistItem.playlist_id == playlist_id)
        .order_by(PlaylistItem.sequence.asc(), PlaylistItem.id.asc())
        .all()
    )
    content_ids = list({item.content_id for item in items})
    contents = {}
    if content_ids:
        contents = {row.id: row for row in db.query(Content).filter(Content.id.in_(content_ids)).all()}
    result: list[PlaybackItem] = []
    for item in items:
        content = contents.get(item.content_id)
        result.append(
            PlaybackItem(
                duration=item.duration or 0,
                content_width=content.width if content else None,
                content_height=content.height if content else None,
                content_type=content.type if content else None,
            )
        )
    return result


def required_min_duration_for(db: Session, playlist_id: str, display: Display) -> int:
    if not display.screen_width or not display.screen_height:
        logger.info("Display %s has no screen resolution; cannot size playlist %s", display.id, playlist_id)
    width, height = ensure_device_resolution(display.screen_width, display.screen_height)
    return compute_required_min_duration_seconds(
        playback_items(db, playlist_id),
        width,
        height,
        get_scroll_px_per_second(db),
    )


def preview_required_duration(db: Session, playlist_id: str, display_id: str) -> dict:
    _require_playlist(db, playlist_id)
    display = _require_display(db, display_id)
    return {
        "playlist_id": playlist_id,
        "display_id": display_id,
        "scroll_px_per_second": get_scroll_px_per_second(db),
        "required_min_duration_seconds": required_min_duration_for(db, playlist_id, display),
    }


def _check_window(
    db: Session,
    display: Display,
    playlist_id: str,
    fields: dict,
    exclude_id: str | None = None,
) -> None:
    required = required_min_duration_for(db, playlist_id, display)
    actual = window_seconds(fields["start_time"], fields["end_time"])
    if actual < required:
        logger.info(
            "Rejecting window %s-%s on display %s: %ss < required %ss",
            fields["start_time"],
            fields["end_time"],
            display.id,
            actual,
            required,
        )
    ensure_window_long_enough(actual, required)

    candidate = to_window({**fields, "id": exclude_id, "display_id": display.id})
    existing = [
        to_window(row)
        for row in db.query(Schedule).filter(Schedule.display_id == display.id).all()
    ]
    ensure_no_conflicts(candidate, existing, exclude_ids={exclude_id} if exclude_id else ())


def refresh_playlist_status(db: Session, playlist_id: str) -> None:
    playlist = db.get(Playlist, playlist_id)
    if not playlist:
        return
    in_use = db.query(Schedule.id).filter(Schedule.playlist_id == playlist_id).first() is not None
    playlist.status = PLAYLIST_IN_USE if in_use else PLAYLIST_DRAFT


def to_schedule_view(schedule: Schedule, playlist: Playlist | None, display: Display | None) -> dict:
    return {
        "id": str(schedule.id),
        "name": schedule.name,
        "playlist_id": str(schedule.playlist_id),
        "display_id": str(schedule.display_id),
        "start_date": schedule.start_date,
        "end_date": schedule.end_date,
        "start_time": schedule.start_time,
        "end_time": schedule.end_time,
        "priority": schedule.priority,
        "is_active": bool(schedule.is_active),
        "created_at": schedule.created_at,
        "updated_at": schedule.updated_at,
        "playlist": {"id": str(schedule.playlist_id), "name": playlist.name if playlist else None},
        "display": {"id": str(schedule.display_id), "name": display.name if display else None},
    }


def _view(db: Session, schedule: Schedule) -> dict:
    return to_schedule_view(
        schedule,
        db.get(Playlist, schedule.playlist_id),
        db.get(Display, schedule.display_id),
    )


def create_schedule(db: Session, payload: dict) -> dict:
    fields = {
        "start_date": payload.get("start_date") or None,
        "end_date": payload.get("end_date") or None,
        "start_time": payload["start_time"],
        "end_time": payload["end_time"],
    }
    validate_window(fields["start_date"], fields["end_date"], fields["start_time"], fields["end_time"])
    playlist = _require_playlist(db, payload["playlist_id"])
    display = _require_display(db, payload["display_id"])

    with display_lock(display.id):
        _check_window(db, display, playlist.id, fields)
        schedule = Schedule(
            name=payload["name"].strip(),
            playlist_id=playlist.id,
            display_id=display.id,
            priority=int(payload.get("priority") or 0),
            is_active=bool(payload.get("is_active", True)),
            **fields,
        )
        db.add(schedule)
        db.flush()
        refresh_playlist_status(db, playlist.id)
        db.commit()
    db.refresh(schedule)
    logger.info("Created schedule %s on display %s", schedule.id, display.id)
    return to_schedule_view(schedule, playlist, display)


def update_schedule(db: Session, schedule_id: str, changes: dict) -> dict:
    schedule = _require_schedule(db, schedule_id)
    previous_playlist_id = schedule.playlist_id

    fields = {
        "start_date": changes.get("start_date") or schedule.start_date,
        "end_date": changes.get("end_date") or schedule.end_date,
        "start_time": changes.get("start_time") or schedule.start_time,
        "end_time": changes.get("end_time") or schedule.end_time,
    }
    validate_window(fields["start_date"], fields["end_date"], fields["start_time"], fields["end_time"])
    playlist = _require_playlist(db, changes.get("playlist_id") or schedule.playlist_id)
    display = _require_display(db, changes.get("display_id") or schedule.display_id)

    with display_lock(display.id):
        _check_window(db, display, playlist.id, fields, exclude_id=schedule.id)
        for key, value in fields.items():
            setattr(schedule, key, value)
        schedule.playlist_id = playlist.id
        schedule.display_id = display.id
        if changes.get("name") is not None:
            schedule.name = changes["name"].strip()
        if changes.get("priority") is not None:
            schedule.priority = int(changes["priority"])
        if changes.get("is_active") is not None:
            schedule.is_active = bool(changes["is_active"])
        db.flush()
        refresh_playlist_status(db, playlist.id)
        if previous_playlist_id != playlist.id:
            refresh_playlist_status(db, previous_playlist_id)
        db.commit()
    db.refresh(schedule)
    logger.info("Updated schedule %s on display %s", schedule.id, display.id)
    return to_schedule_view(schedule, playlist, display)


def _removed_view(schedule: Schedule) -> dict:
    return {"id": str(schedule.id), "display_id": str(schedule.display_id), "playlist_id": str(schedule.playlist_id)}


def delete_schedule(db: Session, schedule_id: str) -> dict:
    schedule = _require_schedule(db, schedule_id)
    with display_lock(schedule.display_id):
        removed = _removed_view(schedule)
        db.delete(schedule)
        db.flush()
        refresh_playlist_status(db, removed["playlist_id"])
        db.commit()
    logger.info("Deleted schedule %s from display %s", removed["id"], removed["display_id"])
    return removed


def delete_schedules(
    db: Session,
    display_id: str | None = None,
    playlist_id: str | None = None,
) -> list[dict]:
    """
    Remove every schedule of a display or of a playlist and commit.

    Locks of all affected displays are taken in id order. Returns the
    removed schedules.
    """
    query = db.query(Schedule)
    if display_id is not None:
        query = query.filter(Schedule.display_id == display_id)
    if playlist_id is not None:
        query = query.filter(Schedule.playlist_id == playlist_id)
    display_ids = sorted({str(row.display_id) for row in query.all()})
    if display_id is not None:
        display_ids = sorted(set(display_ids) | {str(display_id)})

    with ExitStack() as stack:
        for locked_id in display_ids:
            stack.enter_context(display_lock(locked_id))
        rows = query.all()
        removed = [_removed_view(row) for row in rows]
        for row in rows:
            db.delete(row)
        db.flush()
        for affected_playlist_id in {item["playlist_id"] for item in removed}:
            refresh_playlist_status(db, affected_playlist_id)
        db.commit()
    if removed:
        logger.info("Deleted %d schedules across displays %s", len(removed), ", ".join(display_ids))
    return removed


def get_schedule(db: Session, schedule_id: str) -> dict:
    return _view(db, _require_schedule(db, schedule_id))


def list_schedules(
    db: Session,
    display_id: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> dict:
    safe_page = max(1, page)
    safe_page_size = max(1, min(page_size, MAX_PAGE_SIZE))

    query = db.query(Schedule)
    if display_id:
        query = query.filter(Schedule.display_id == display_id)
    total = query.count()
    rows = (
        query.order_by(Schedule.created_at.desc(), Schedule.id.asc())
        .offset((safe_page - 1) * safe_page_size)
        .limit(safe_page_size)
        .all()
    )

    playlist_ids = list({row.playlist_id for row in rows})
    display_ids = list({row.display_id for row in rows})
    playlists = {}
    displays = {}
    if playlist_ids:
        playlists = {row.id: row for row in db.query(Playlist).filter(Playlist.id.in_(playlist_ids)).all()}
    if display_ids:
        displays = {row.id: row for row in db.query(Display).filter(Display.id.in_(display_ids)).all()}

    return {
        "items": [
            to_schedule_view(row, playlists.get(row.playlist_id), displays.get(row.display_id))
            for row in rows
        ],
        "total": total,
        "page": safe_page,
        "page_size": safe_page_size,
    }


def get_active_schedule_for_display(
    db: Session,
    display_id: str,
    now: datetime | None = None,
    tz: str = SCHEDULE_TIMEZONE,
) -> dict | None:
    display = _require_display(db, display_id)
    schedules = db.query(Schedule).filter(Schedule.display_id == display.id).all()
    active = select_active_schedule(schedules, now or datetime.now(timezone.utc), tz)
    if active is None:
        return None
    return to_schedule_view(active, db.get(Playlist, active.playlist_id), display)
