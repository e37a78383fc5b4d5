"""Aritmética de horas del día (HH:MM / HH:MM:SS) sin zona horaria."""

from __future__ import annotations

import logging
from datetime import datetime, time

logger = logging.getLogger(__name__)

_TIME_FORMATS: tuple[str, ...] = ("%H:%M:%S", "%H:%M")


def parse_time_of_day(value: str | time | None) -> time | None:
    """Parse a wall-clock time string.

    Args:
        value: ``HH:MM`` or ``HH:MM:SS`` string, or an already parsed time.

    Returns:
        The parsed time, or None when absent or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value
    text = str(value).strip()
    if not text:
        return None
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    logger.debug("Unparseable time of day: %r", value)
    return None


def _seconds(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def duration_minutes(
    start: str | time | None, end: str | time | None
) -> int | None:
    """Whole minutes between two times of the same day.

    Sub-minute remainders are truncated. An end before the start is
    rejected, there is no crossing of midnight.

    Returns:
        Minutes, or None if either side is missing, unparseable or negative.
    """
    start_t = parse_time_of_day(start)
    end_t = parse_time_of_day(end)
    if start_t is None or end_t is None:
        return None
    diff = _seconds(end_t) - _seconds(start_t)
    if diff < 0:
        return None
    return diff // 60


def format_time_of_day(value: str | time | None) -> str | None:
    """Return the ``HH:MM`` prefix of a time, dropping seconds."""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value)[:5]


def format_minutes(minutes: int | None) -> str:
    """Label a duration as ``H:MM`` ("" for None)."""
    if minutes is None:
        return ""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}:{mins:02d}"
