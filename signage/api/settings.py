from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from signage.db import get_db
from signage.schemas.settings import DisplayRuntimeSettingsIn, DisplayRuntimeSettingsOut
from signage.services import settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/display-runtime", response_model=DisplayRuntimeSettingsOut)
def get_display_runtime_settings(db: Session = Depends(get_db)):
    return settings.get_display_runtime_settings(db)


@router.put("/display-runtime", response_model=DisplayRuntimeSettingsOut)
def update_display_runtime_settings(payload: DisplayRuntimeSettingsIn, db: Session = Depends(get_db)):
    return settings.update_display_runtime_settings(db, payload.scroll_px_per_second)
