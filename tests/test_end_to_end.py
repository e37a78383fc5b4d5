"""Escenario completo: grilla, métricas y partición sobre el mismo lote."""

from __future__ import annotations

from datetime import date

from carelog.aggregate import aggregate
from carelog.model import ActivityRecord, RecordState
from carelog.month_grid import build_month_grid
from carelog.tasks import partition
from carelog.windows import ReportRange, range_bounds, records_in_range


def _records() -> list[ActivityRecord]:
    return [
        ActivityRecord(
            id="r1",
            activity_date=date(2025, 3, 5),
            start_time="09:00",
            end_time="10:00",
            staff_name="A",
            activity_type_name="Visit",
        ),
        ActivityRecord(
            id="r2",
            activity_date=date(2025, 3, 5),
            staff_name="A",
            activity_type_name="Call",
        ),
        ActivityRecord(
            id="r3",
            activity_date=date(2025, 3, 20),
            task_time="14:00",
            staff_name="B",
            activity_type_name="Visit",
            state=RecordState.TASK,
        ),
    ]


def test_march_2025_scenario() -> None:
    records = _records()

    grid = build_month_grid(2025, 3, records)
    march_5 = next(d for d in grid if d.date == date(2025, 3, 5))
    assert [r.id for r in march_5.activities] == ["r1", "r2"]
    march_20 = next(d for d in grid if d.date == date(2025, 3, 20))
    assert [r.id for r in march_20.activities] == ["r3"]

    window = range_bounds(ReportRange.THIS_MONTH, date(2025, 3, 10))
    metrics = aggregate(records_in_range(records, window), window)
    staff = {m.name: (m.count, m.total_minutes) for m in metrics.by_staff}
    assert staff == {"A": (2, 60), "B": (1, 0)}
    types = {m.name: m.count for m in metrics.by_type}
    assert types == {"Visit": 2, "Call": 1}

    parts = partition(records, date(2025, 3, 10))
    assert [r.id for r in parts.pending] == ["r3"]
    assert [r.id for r in parts.completed] == ["r1", "r2"]
    assert parts.overdue == []


def test_task_before_today_is_overdue() -> None:
    task = ActivityRecord(
        id="t", activity_date=date(2025, 3, 1), task_time="14:00", state=RecordState.TASK
    )
    parts = partition([task], date(2025, 3, 10))
    assert [r.id for r in parts.overdue] == ["t"]
