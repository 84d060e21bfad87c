import logging
import os
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = (os.getenv("SIGNAGE_DATABASE_URL", "sqlite:///./signage.db") or "").strip()
API_KEY = os.getenv("SIGNAGE_API_KEY", "").strip()
LOG_LEVEL = (os.getenv("SIGNAGE_LOG_LEVEL", "INFO") or "INFO").strip().upper()
QUIET_ACCESS_LOG = _env_flag("SIGNAGE_QUIET_ACCESS_LOG", "1")
QUIET_WEBSOCKET_LOG = _env_flag("SIGNAGE_QUIET_WEBSOCKET_LOG", "1")
DEFAULT_SCROLL_PX_PER_SECOND = (os.getenv("SIGNAGE_DEFAULT_SCROLL_PX_PER_SECOND", "24") or "24").strip()

_RAW_SCHEDULE_TIMEZONE = (os.getenv("SIGNAGE_SCHEDULE_TIMEZONE", "UTC") or "UTC").strip()
try:
    ZoneInfo(_RAW_SCHEDULE_TIMEZONE)
    SCHEDULE_TIMEZONE = _RAW_SCHEDULE_TIMEZONE
except Exception:
    logger.warning("Unknown SIGNAGE_SCHEDULE_TIMEZONE %r, falling back to UTC", _RAW_SCHEDULE_TIMEZONE)
    SCHEDULE_TIMEZONE = "UTC"
