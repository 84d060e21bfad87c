import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from fractions import Fraction

from signage.scheduling.errors import DeviceResolutionMissingError, WindowTooShortError

logger = logging.getLogger(__name__)

DEFAULT_SCROLL_PX_PER_SECOND = 24
MIN_SCROLL_PX_PER_SECOND = 1
MAX_SCROLL_PX_PER_SECOND = 200

# Content that is rendered fit-to-width and scrolled when taller than the screen.
SCROLLABLE_CONTENT_TYPES = {"IMAGE", "PDF", "DOCUMENT"}


@dataclass(frozen=True)
class PlaybackItem:
    duration: float
    content_width: float | None = None
    content_height: float | None = None
    content_type: str | None = None

    @property
    def is_scrollable(self) -> bool:
        kind = (self.content_type or "").strip().upper()
        if kind not in SCROLLABLE_CONTENT_TYPES:
            return False
        return bool(self.content_width and self.content_width > 0 and self.content_height and self.content_height > 0)


def resolve_scroll_px_per_second(raw, default: int = DEFAULT_SCROLL_PX_PER_SECOND) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring non-integer scroll speed %r, using %s px/s", raw, default)
        return default
    if value < MIN_SCROLL_PX_PER_SECOND or value > MAX_SCROLL_PX_PER_SECOND:
        logger.warning("Ignoring out-of-range scroll speed %s, using %s px/s", value, default)
        return default
    return value


def scroll_overflow_seconds(
    item: PlaybackItem,
    device_width: float,
    device_height: float,
    scroll_px_per_second: int,
) -> int:
    if not item.is_scrollable:
        return 0
    scaled_height = Fraction(device_width) / Fraction(item.content_width) * Fraction(item.content_height)
    overflow = scaled_height - Fraction(device_height)
    if overflow <= 0:
        return 0
    return math.ceil(overflow / scroll_px_per_second)


def compute_required_min_duration_seconds(
    items: Iterable[PlaybackItem],
    device_width: float,
    device_height: float,
    scroll_px_per_second: int = DEFAULT_SCROLL_PX_PER_SECOND,
) -> int:
    """
    Smallest window, in seconds, that plays every item of a playlist once on
    a display of ``device_width`` x ``device_height`` pixels.

    Images and documents are scaled to the screen width; whatever exceeds the
    screen height has to scroll past at ``scroll_px_per_second``, and that
    scroll time is added on top of the item's own duration.
    """
    speed = resolve_scroll_px_per_second(scroll_px_per_second)
    total = Fraction(0)
    for item in items:
        total += max(Fraction(0), Fraction(item.duration or 0))
        total += scroll_overflow_seconds(item, device_width, device_height, speed)
    return math.ceil(total)


def ensure_device_resolution(screen_width: float | None, screen_height: float | None) -> tuple[float, float]:
    if not screen_width or not screen_height or screen_width <= 0 or screen_height <= 0:
        raise DeviceResolutionMissingError()
    return screen_width, screen_height


def ensure_window_long_enough(window_seconds: int, required_min_duration_seconds: int) -> None:
    if window_seconds < required_min_duration_seconds:
        raise WindowTooShortError(
            required_min_duration_seconds=required_min_duration_seconds,
            window_seconds=window_seconds,
        )
