from datetime import datetime
from pydantic import BaseModel, Field


class ScheduleCreateIn(BaseModel):
    name: str = Field(..., min_length=1)
    playlist_id: str
    display_id: str
    start_date: str | None = None
    end_date: str | None = None
    start_time: str
    end_time: str
    priority: int = 0
    is_active: bool = True


class ScheduleUpdateIn(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    playlist_id: str | None = None
    display_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    priority: int | None = None
    is_active: bool | None = None


class ScheduleRef(BaseModel):
    id: str
    name: str | None = None


class ScheduleOut(BaseModel):
    id: str
    name: str
    playlist_id: str
    display_id: str
    start_date: str | None = None
    end_date: str | None = None
    start_time: str
    end_time: str
    priority: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    playlist: ScheduleRef
    display: ScheduleRef


class SchedulePageOut(BaseModel):
    items: list[ScheduleOut]
    total: int
    page: int
    page_size: int


class ActiveScheduleOut(BaseModel):
    display_id: str
    timezone: str
    evaluated_at: datetime
    schedule: ScheduleOut | None = None
