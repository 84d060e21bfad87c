from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from signage.api.common import normalize_entity_id
from signage.db import get_db
from signage.schemas.schedule import ScheduleCreateIn, ScheduleOut, SchedulePageOut, ScheduleUpdateIn
from signage.services import schedules
from signage.services.realtime import hub

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.post("", status_code=201, response_model=ScheduleOut)
def create_schedule(
    payload: ScheduleCreateIn,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    data = payload.model_dump()
    data["playlist_id"] = normalize_entity_id(data["playlist_id"], "playlist_id")
    data["display_id"] = normalize_entity_id(data["display_id"], "display_id")
    view = schedules.create_schedule(db, data)
    background_tasks.add_task(hub.schedule_changed, view["display_id"], view["id"], "created")
    return view


@router.get("", response_model=SchedulePageOut)
def list_schedules(
    display_id: str | None = None,
    page: int = 1,
    page_size: int = schedules.DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db),
):
    if display_id is not None:
        display_id = normalize_entity_id(display_id, "display_id")
    return schedules.list_schedules(db, display_id=display_id, page=page, page_size=page_size)


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(schedule_id: str, db: Session = Depends(get_db)):
    return schedules.get_schedule(db, normalize_entity_id(schedule_id, "schedule_id"))


@router.put("/{schedule_id}", response_model=ScheduleOut)
def update_schedule(
    schedule_id: str,
    payload: ScheduleUpdateIn,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    schedule_id = normalize_entity_id(schedule_id, "schedule_id")
    previous = schedules.get_schedule(db, schedule_id)
    view = schedules.update_schedule(db, schedule_id, payload.model_dump(exclude_unset=True))
    if previous["display_id"] != view["display_id"]:
        background_tasks.add_task(hub.schedule_changed, previous["display_id"], view["id"], "moved")
    background_tasks.add_task(hub.schedule_changed, view["display_id"], view["id"], "updated")
    return view


@router.delete("/{schedule_id}")
def delete_schedule(
    schedule_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    removed = schedules.delete_schedule(db, normalize_entity_id(schedule_id, "schedule_id"))
    background_tasks.add_task(hub.schedule_changed, removed["display_id"], removed["id"], "deleted")
    return {"ok": True}
