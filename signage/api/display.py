from datetime import datetime, timezone

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from signage.api.common import normalize_entity_id
from signage.config import SCHEDULE_TIMEZONE
from signage.db import get_db
from signage.models.display import Display
from signage.schemas.display import DisplayIn, DisplayOut
from signage.schemas.schedule import ActiveScheduleOut
from signage.services import schedules
from signage.services.realtime import hub

router = APIRouter(prefix="/displays", tags=["displays"])

ORIENTATIONS = {"LANDSCAPE", "PORTRAIT"}


def _normalize_orientation(value: str | None) -> str:
    orientation = (value or "LANDSCAPE").strip().upper()
    if orientation not in ORIENTATIONS:
        raise HTTPException(status_code=400, detail="orientation must be LANDSCAPE or PORTRAIT")
    return orientation


def _find_display(db: Session, display_id: str) -> Display:
    display = db.get(Display, normalize_entity_id(display_id, "display_id"))
    if not display:
        raise HTTPException(status_code=404, detail="Display not found")
    return display


def _parse_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid 'at' value. Use an ISO-8601 datetime.") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@router.post("", status_code=201, response_model=DisplayOut)
def create_display(payload: DisplayIn, db: Session = Depends(get_db)):
    display = Display(
        name=payload.name.strip(),
        location=(payload.location or "").strip() or None,
        screen_width=payload.screen_width,
        screen_height=payload.screen_height,
        orientation=_normalize_orientation(payload.orientation),
    )
    db.add(display)
    db.commit()
    db.refresh(display)
    return display


@router.get("", response_model=list[DisplayOut])
def list_displays(db: Session = Depends(get_db)):
    return db.query(Display).order_by(Display.name.asc(), Display.id.asc()).all()


@router.get("/{display_id}", response_model=DisplayOut)
def get_display(display_id: str, db: Session = Depends(get_db)):
    return _find_display(db, display_id)


@router.put("/{display_id}", response_model=DisplayOut)
def update_display(
    display_id: str,
    name: str | None = None,
    location: str | None = None,
    screen_width: int | None = None,
    screen_height: int | None = None,
    orientation: str | None = None,
    db: Session = Depends(get_db),
):
    display = _find_display(db, display_id)
    if name is not None:
        cleaned = name.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Display name cannot be empty")
        display.name = cleaned
    if location is not None:
        display.location = location.strip() or None
    if screen_width is not None or screen_height is not None:
        width = screen_width if screen_width is not None else display.screen_width
        height = screen_height if screen_height is not None else display.screen_height
        if not width or not height or width <= 0 or height <= 0:
            raise HTTPException(status_code=400, detail="screen_width and screen_height must be positive")
        display.screen_width = width
        display.screen_height = height
    if orientation is not None:
        display.orientation = _normalize_orientation(orientation)
    db.commit()
    db.refresh(display)
    return display


@router.delete("/{display_id}")
def delete_display(display_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    display = _find_display(db, display_id)
    removed_id = str(display.id)
    for removed in schedules.delete_schedules(db, display_id=display.id):
        background_tasks.add_task(hub.schedule_changed, removed["display_id"], removed["id"], "deleted")
    db.delete(display)
    db.commit()
    background_tasks.add_task(hub.publish, "display_removed", {"display_id": removed_id})
    return {"ok": True}


@router.get("/{display_id}/active-schedule", response_model=ActiveScheduleOut)
def active_schedule(
    display_id: str,
    at: str | None = None,
    db: Session = Depends(get_db),
):
    display = _find_display(db, display_id)
    evaluated_at = _parse_at(at) or datetime.now(timezone.utc)
    view = schedules.get_active_schedule_for_display(db, display.id, now=evaluated_at, tz=SCHEDULE_TIMEZONE)
    if at is None:
        # Only a live poll counts as contact from the display.
        display.last_seen = datetime.utcnow()
        db.commit()
    return {
        "display_id": str(display.id),
        "timezone": SCHEDULE_TIMEZONE,
        "evaluated_at": evaluated_at,
        "schedule": view,
    }
