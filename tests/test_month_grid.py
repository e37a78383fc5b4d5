from __future__ import annotations

import calendar
from datetime import date

import pytest

from carelog.config import EngineConfig
from carelog.model import ActivityRecord, RecordState
from carelog.month_grid import (
    ViewMode,
    build_month_grid,
    date_key,
    filter_view,
    month_bounds,
    shift_month,
    summarize_day,
)


def _rec(
    rid: str, day: date | None, state: RecordState = RecordState.COMPLETED
) -> ActivityRecord:
    return ActivityRecord(id=rid, activity_date=day, state=state)


@pytest.mark.parametrize("year", [2024, 2025, 2026])
@pytest.mark.parametrize("month", range(1, 13))
def test_grid_always_has_42_cells(year: int, month: int) -> None:
    grid = build_month_grid(year, month, [])
    assert len(grid) == 42
    current = [d for d in grid if d.is_current_month]
    assert len(current) == calendar.monthrange(year, month)[1]
    dates = [d.date for d in grid]
    assert dates == sorted(dates)
    assert len({date_key(d) for d in dates}) == 42
    assert grid[0].date.weekday() == 6  # domingo


def test_grid_march_2025_padding() -> None:
    grid = build_month_grid(2025, 3, [])
    assert grid[0].date == date(2025, 2, 23)
    assert grid[6].date == date(2025, 3, 1)
    assert grid[6].is_current_month
    assert grid[-1].date == date(2025, 4, 5)
    assert sum(1 for d in grid[:6] if not d.is_current_month) == 6


def test_grid_month_starting_on_week_start_has_no_lead_days() -> None:
    grid = build_month_grid(2026, 2, [])
    assert grid[0].date == date(2026, 2, 1)
    assert grid[0].is_current_month
    assert sum(1 for d in grid if not d.is_current_month) == 14


def test_grid_week_start_monday() -> None:
    grid = build_month_grid(2025, 3, [], config=EngineConfig(week_start=1))
    assert grid[0].date == date(2025, 2, 24)
    assert grid[0].date.weekday() == 0
    assert len(grid) == 42


def test_grid_buckets_records_in_input_order() -> None:
    records = [
        _rec("b", date(2025, 3, 5)),
        _rec("x", date(2025, 3, 6)),
        _rec("a", date(2025, 3, 5)),
    ]
    grid = build_month_grid(2025, 3, records)
    by_day = {d.date: d for d in grid}
    assert [r.id for r in by_day[date(2025, 3, 5)].activities] == ["b", "a"]
    assert [r.id for r in by_day[date(2025, 3, 6)].activities] == ["x"]


def test_grid_never_fills_adjacent_month_cells() -> None:
    records = [_rec("feb", date(2025, 2, 28)), _rec("apr", date(2025, 4, 2))]
    grid = build_month_grid(2025, 3, records)
    assert all(d.activities == () for d in grid)


def test_grid_drops_undated_records() -> None:
    grid = build_month_grid(2025, 3, [_rec("none", None), _rec("ok", date(2025, 3, 31))])
    filled = [d for d in grid if d.activities]
    assert len(filled) == 1
    assert filled[0].date == date(2025, 3, 31)


def test_grid_invalid_month_raises() -> None:
    with pytest.raises(ValueError, match="month"):
        build_month_grid(2025, 13, [])


def test_date_key_is_zero_padded() -> None:
    assert date_key(date(2025, 3, 5)) == "2025-03-05"
    assert date_key(date(987, 12, 31)) == "0987-12-31"


def test_month_bounds() -> None:
    r = month_bounds(2024, 2)
    assert r.start == date(2024, 2, 1)
    assert r.end == date(2024, 2, 29)
    assert month_bounds(2025, 12).end == date(2025, 12, 31)


def test_shift_month_wraps_years() -> None:
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 12, 1) == (2026, 1)
    assert shift_month(2025, 3, 0) == (2025, 3)
    assert shift_month(2025, 3, -14) == (2024, 1)


def test_filter_view_modes() -> None:
    records = [
        _rec("c", date(2025, 3, 1)),
        _rec("t", date(2025, 3, 1), RecordState.TASK),
    ]
    assert [r.id for r in filter_view(records, ViewMode.ALL)] == ["c", "t"]
    assert [r.id for r in filter_view(records, ViewMode.COMPLETED)] == ["c"]
    assert [r.id for r in filter_view(records, ViewMode.TASKS)] == ["t"]


def test_summarize_day_uses_today() -> None:
    records = [
        _rec("done", date(2025, 3, 5)),
        _rec("task", date(2025, 3, 5), RecordState.TASK),
    ]
    day = next(d for d in build_month_grid(2025, 3, records) if d.date == date(2025, 3, 5))
    before = summarize_day(day, date(2025, 3, 5))
    assert [r.id for r in before.pending] == ["task"]
    after = summarize_day(day, date(2025, 3, 6))
    assert [r.id for r in after.overdue] == ["task"]
    assert [r.id for r in after.completed] == ["done"]
