"""Ventanas de reporte alineadas a meses calendario."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from carelog.model import ActivityRecord, DateRange


class ReportRange(Enum):
    """Analytics periods offered on the dashboard."""

    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_3_MONTHS = "last_3_months"

    @classmethod
    def parse(cls, value: str) -> ReportRange:
        """Parse a CLI/query value such as ``"last_month"``.

        Raises:
            ValueError: If the value is not a known range.
        """
        key = (value or "").strip().lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown report range: {value!r}")


def range_bounds(report_range: ReportRange, today: date) -> DateRange:
    """Return the inclusive date range of a reporting period.

    ``this_month`` runs from the 1st to the end of the current month,
    ``last_month`` covers the whole previous month and ``last_3_months``
    runs from the 1st of two months ago to the end of the current month.
    """
    month_start = today.replace(day=1)
    month_end = month_start + relativedelta(months=1, days=-1)
    if report_range is ReportRange.LAST_MONTH:
        start = month_start - relativedelta(months=1)
        return DateRange(start=start, end=month_start - relativedelta(days=1))
    if report_range is ReportRange.LAST_3_MONTHS:
        return DateRange(start=month_start - relativedelta(months=2), end=month_end)
    return DateRange(start=month_start, end=month_end)


def records_in_range(
    records: Iterable[ActivityRecord], window: DateRange
) -> list[ActivityRecord]:
    """Records whose activity date falls in ``window`` (undated ones drop)."""
    return [r for r in records if window.contains(r.activity_date)]
