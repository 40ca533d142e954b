from __future__ import annotations

import logging
import re

from .models import TimeBlock

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = "09:00-18:00"
MIN_VISIT_MINUTES = 30

BLOCK_WINDOWS: dict[TimeBlock, tuple[str, str]] = {
    TimeBlock.BREAKFAST: ("08:00", "10:00"),
    TimeBlock.MORNING_ACTIVITY: ("10:00", "12:00"),
    TimeBlock.LUNCH: ("12:00", "14:00"),
    TimeBlock.CAFE: ("14:00", "15:30"),
    TimeBlock.AFTERNOON_ACTIVITY: ("15:30", "17:00"),
    TimeBlock.DINNER: ("17:00", "19:00"),
    TimeBlock.EVENING_ACTIVITY: ("19:00", "21:00"),
}

# Per-block adjustments by broad category kind.
CATEGORY_WINDOWS: dict[TimeBlock, dict[str, tuple[str, str]]] = {
    TimeBlock.BREAKFAST: {
        "cafe": ("08:00", "09:30"),
        "restaurant": ("08:30", "10:00"),
        "attraction": ("09:00", "10:00"),
    },
    TimeBlock.MORNING_ACTIVITY: {
        "attraction": ("10:00", "12:00"),
        "restaurant": ("10:30", "12:00"),
        "cafe": ("10:00", "11:30"),
    },
    TimeBlock.LUNCH: {
        "restaurant": ("12:00", "14:00"),
        "cafe": ("12:30", "14:00"),
        "attraction": ("12:00", "13:30"),
    },
    TimeBlock.CAFE: {
        "cafe": ("14:00", "15:30"),
        "restaurant": ("14:30", "15:30"),
        "attraction": ("14:00", "15:00"),
    },
    TimeBlock.AFTERNOON_ACTIVITY: {
        "attraction": ("15:30", "17:00"),
        "restaurant": ("16:00", "17:00"),
        "cafe": ("15:30", "16:30"),
    },
    TimeBlock.DINNER: {
        "restaurant": ("17:00", "19:00"),
        "cafe": ("17:30", "19:00"),
        "attraction": ("17:00", "18:30"),
    },
    TimeBlock.EVENING_ACTIVITY: {
        "culture": ("19:00", "21:00"),
        "cafe": ("19:30", "21:00"),
        "restaurant": ("19:00", "20:30"),
    },
}

_CATEGORY_KINDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("cafe", ("cafe", "카페", "dessert", "디저트")),
    ("restaurant", ("restaurant", "food", "맛집", "음식점")),
    ("culture", ("culture", "museum", "문화시설", "박물관")),
    ("attraction", ("attraction", "landmark", "관광지", "명소")),
)

_HOURS_RE = re.compile(r"^\s*(\d{1,2}:\d{2})\s*[-~]\s*(\d{1,2}:\d{2})\s*$")
_ALWAYS_OPEN = ("24시간", "24 hours", "00:00-24:00")


def _to_minutes(value: str) -> int | None:
    try:
        hour_text, minute_text = value.split(":")
        hour, minute = int(hour_text), int(minute_text)
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour * 60 + minute


def _format(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _category_kind(category: str | None) -> str | None:
    if not category:
        return None
    lowered = category.lower()
    for kind, keywords in _CATEGORY_KINDS:
        if any(k in lowered for k in keywords):
            return kind
    return None


def validate_window(start: str, end: str, fallback: str) -> str:
    """Return ``start-end`` when it is a usable window, else ``fallback``."""
    start_min = _to_minutes(start)
    end_min = _to_minutes(end)
    if start_min is None or end_min is None:
        logger.warning("Invalid time window %s-%s, using %s", start, end, fallback)
        return fallback
    if end_min - start_min < MIN_VISIT_MINUTES:
        logger.warning("Time window %s-%s too short or inverted, using %s", start, end, fallback)
        return fallback
    return f"{_format(start_min)}-{_format(end_min)}"


def _clamp_to_opening_hours(block: TimeBlock, operating_hours: str) -> str | None:
    match = _HOURS_RE.match(operating_hours)
    if not match:
        return None

    open_min = _to_minutes(match.group(1))
    close_min = _to_minutes(match.group(2))
    if open_min is None or close_min is None:
        logger.warning("Could not parse operating hours %r", operating_hours)
        return None

    block_start, block_end = BLOCK_WINDOWS[block]
    fallback = f"{block_start}-{block_end}"
    start = max(open_min, _to_minutes(block_start))
    end = min(close_min, _to_minutes(block_end))
    return validate_window(_format(start), _format(end), fallback)


def recommend_visit_time(
    time_block: TimeBlock | str,
    category: str | None = None,
    operating_hours: str | None = None,
) -> str:
    """
    Suggest a ``HH:MM-HH:MM`` visit window for a place in ``time_block``.

    Opening hours narrow the block's window when they can be parsed;
    otherwise the window depends on the kind of place.
    """
    try:
        block = TimeBlock(time_block)
    except ValueError:
        return DEFAULT_WINDOW

    if operating_hours and not any(m in operating_hours for m in _ALWAYS_OPEN):
        clamped = _clamp_to_opening_hours(block, operating_hours)
        if clamped is not None:
            return clamped

    block_start, block_end = BLOCK_WINDOWS[block]
    kind = _category_kind(category)
    start, end = CATEGORY_WINDOWS[block].get(kind, (block_start, block_end))
    return validate_window(start, end, f"{block_start}-{block_end}")
