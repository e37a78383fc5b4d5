"""Grilla mensual de calendario (6 semanas x 7 días) con registros por día."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from enum import Enum

import pandas as pd
from dateutil.relativedelta import relativedelta

from carelog.config import DEFAULT_CONFIG, EngineConfig
from carelog.model import ActivityRecord, CalendarDay, DateRange, TaskPartition
from carelog.tasks import partition

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    """Which records a calendar view shows."""

    ALL = "all"
    COMPLETED = "completed"
    TASKS = "tasks"


def date_key(day: date) -> str:
    """Canonical ``YYYY-MM-DD`` key built from the calendar fields."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")


def month_bounds(year: int, month: int) -> DateRange:
    """First and last day of a month (the fetch window of a month view)."""
    _check_month(month)
    start = date(year, month, 1)
    return DateRange(start=start, end=start + relativedelta(months=1, days=-1))


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (negative goes back)."""
    _check_month(month)
    moved = date(year, month, 1) + relativedelta(months=delta)
    return moved.year, moved.month


def _lead_days(first: date, week_start: int) -> int:
    """Días del mes anterior antes del 1 (0 = domingo)."""
    sunday_based = (first.weekday() + 1) % 7
    return (sunday_based - week_start) % 7


def _bucket_by_day(
    records: Iterable[ActivityRecord],
) -> dict[str, list[ActivityRecord]]:
    buckets: dict[str, list[ActivityRecord]] = {}
    dropped = 0
    for record in records:
        if record.activity_date is None:
            dropped += 1
            continue
        buckets.setdefault(date_key(record.activity_date), []).append(record)
    if dropped:
        logger.debug("Skipped %d record(s) without activity_date", dropped)
    return buckets


def build_month_grid(
    year: int,
    month: int,
    records: Sequence[ActivityRecord],
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[CalendarDay]:
    """Build the fixed month grid for a calendar view.

    The grid always has ``config.grid_cells`` cells and starts on
    ``config.week_start``. Days of the adjacent months pad both ends and
    never carry records. Within a day, records keep the input order.

    Args:
        year: Target year.
        month: Target month (1-12).
        records: Activity records, usually the month's fetch result.
        config: Engine configuration.

    Returns:
        List of calendar cells, in date order.

    Raises:
        ValueError: If ``month`` is out of range.
    """
    _check_month(month)
    first = date(year, month, 1)
    grid_start = first - timedelta(days=_lead_days(first, config.week_start))
    days = pd.date_range(start=grid_start, periods=config.grid_cells, freq="D").date

    buckets = _bucket_by_day(records)
    grid: list[CalendarDay] = []
    for day in days:
        in_month = day.year == year and day.month == month
        activities = tuple(buckets.get(date_key(day), ())) if in_month else ()
        grid.append(
            CalendarDay(date=day, is_current_month=in_month, activities=activities)
        )
    return grid


def filter_view(
    records: Iterable[ActivityRecord], mode: ViewMode
) -> list[ActivityRecord]:
    """Keep the records a view mode displays."""
    if mode is ViewMode.COMPLETED:
        return [r for r in records if r.is_completed]
    if mode is ViewMode.TASKS:
        return [r for r in records if r.is_task]
    return list(records)


def summarize_day(day: CalendarDay, today: date) -> TaskPartition:
    """Overdue, pending and completed records of one cell."""
    return partition(day.activities, today)
