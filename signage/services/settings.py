import logging

from sqlalchemy.orm import Session

from signage.config import DEFAULT_SCROLL_PX_PER_SECOND
from signage.models.system_setting import DISPLAY_RUNTIME_SCROLL_PX_PER_SECOND_KEY, SystemSetting
from signage.scheduling.duration import (
    DEFAULT_SCROLL_PX_PER_SECOND as BUILTIN_SCROLL_PX_PER_SECOND,
    MAX_SCROLL_PX_PER_SECOND,
    MIN_SCROLL_PX_PER_SECOND,
    resolve_scroll_px_per_second,
)
from signage.services.errors import InvalidSettingError

logger = logging.getLogger(__name__)


def default_scroll_px_per_second() -> int:
    return resolve_scroll_px_per_second(DEFAULT_SCROLL_PX_PER_SECOND, default=BUILTIN_SCROLL_PX_PER_SECOND)


def get_scroll_px_per_second(db: Session) -> int:
    setting = db.get(SystemSetting, DISPLAY_RUNTIME_SCROLL_PX_PER_SECOND_KEY)
    fallback = default_scroll_px_per_second()
    if setting is None:
        return fallback
    return resolve_scroll_px_per_second(setting.value, default=fallback)


def get_display_runtime_settings(db: Session) -> dict:
    return {"scroll_px_per_second": get_scroll_px_per_second(db)}


def update_display_runtime_settings(db: Session, scroll_px_per_second: int) -> dict:
    if isinstance(scroll_px_per_second, bool) or not isinstance(scroll_px_per_second, int):
        raise InvalidSettingError("Scroll speed must be an integer.")
    if scroll_px_per_second < MIN_SCROLL_PX_PER_SECOND or scroll_px_per_second > MAX_SCROLL_PX_PER_SECOND:
        raise InvalidSettingError(
            f"Scroll speed must be between {MIN_SCROLL_PX_PER_SECOND} and {MAX_SCROLL_PX_PER_SECOND}."
        )
    setting = db.get(SystemSetting, DISPLAY_RUNTIME_SCROLL_PX_PER_SECOND_KEY)
    if setting is None:
        setting = SystemSetting(key=DISPLAY_RUNTIME_SCROLL_PX_PER_SECOND_KEY, value=str(scroll_px_per_second))
        db.add(setting)
    else:
        setting.value = str(scroll_px_per_second)
    db.commit()
    logger.info("Display scroll speed set to %s px/s", scroll_px_per_second)
    return get_display_runtime_settings(db)
