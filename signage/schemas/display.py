from datetime import datetime
from pydantic import BaseModel, Field


class DisplayIn(BaseModel):
    name: str = Field(..., min_length=1)
    location: str | None = None
    screen_width: int | None = Field(default=None, gt=0)
    screen_height: int | None = Field(default=None, gt=0)
    orientation: str = "LANDSCAPE"


class DisplayOut(BaseModel):
    id: str
    name: str
    location: str | None = None
    screen_width: int | None = None
    screen_height: int | None = None
    orientation: str | None = None
    last_seen: datetime | None = None

    class Config:
        from_attributes = True
