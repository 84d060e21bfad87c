from datetime import datetime
from pydantic import BaseModel


class PlaylistItemOut(BaseModel):
    id: str
    playlist_id: str
    content_id: str
    sequence: int
    duration: int

    class Config:
        from_attributes = True


class PlaylistOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class RequiredDurationOut(BaseModel):
    playlist_id: str
    display_id: str
    scroll_px_per_second: int
    required_min_duration_seconds: int
