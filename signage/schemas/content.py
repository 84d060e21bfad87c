from datetime import datetime
from pydantic import BaseModel, Field


class ContentIn(BaseModel):
    title: str = Field(..., min_length=1)
    type: str
    mime_type: str | None = None
    file_key: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    duration: int | None = Field(default=None, ge=0)


class ContentOut(BaseModel):
    id: str
    title: str
    type: str
    mime_type: str | None = None
    file_key: str | None = None
    file_size: int | None = None
    width: int | None = None
    height: int | None = None
    duration: int | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
