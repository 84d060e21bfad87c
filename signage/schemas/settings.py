from pydantic import BaseModel


class DisplayRuntimeSettingsIn(BaseModel):
    scroll_px_per_second: int


class DisplayRuntimeSettingsOut(BaseModel):
    scroll_px_per_second: int
