from __future__ import annotations

from datetime import date

from carelog.model import ActivityRecord, RecordState
from carelog.tasks import partition


def _rec(rid: str, day: date | None, state: RecordState) -> ActivityRecord:
    return ActivityRecord(id=rid, activity_date=day, state=state)


def test_partition_splits_by_state_and_date() -> None:
    records = [
        _rec("done", date(2025, 3, 1), RecordState.COMPLETED),
        _rec("late", date(2025, 3, 9), RecordState.TASK),
        _rec("today", date(2025, 3, 10), RecordState.TASK),
        _rec("later", date(2025, 3, 20), RecordState.TASK),
    ]
    out = partition(records, date(2025, 3, 10))
    assert [r.id for r in out.completed] == ["done"]
    assert [r.id for r in out.overdue] == ["late"]
    assert [r.id for r in out.pending] == ["today", "later"]


def test_partition_is_exhaustive_and_disjoint() -> None:
    records = [
        _rec(
            str(i),
            date(2025, 1, 1 + i % 28),
            RecordState.TASK if i % 3 else RecordState.COMPLETED,
        )
        for i in range(40)
    ]
    out = partition(records, date(2025, 1, 15))
    assert len(out) == len(records)
    ids = [r.id for r in out.overdue + out.pending + out.completed]
    assert sorted(ids) == sorted(r.id for r in records)


def test_partition_undated_task_is_pending() -> None:
    out = partition([_rec("x", None, RecordState.TASK)], date(2025, 1, 1))
    assert [r.id for r in out.pending] == ["x"]


def test_partition_future_completed_stays_completed() -> None:
    out = partition([_rec("x", date(2030, 1, 1), RecordState.COMPLETED)], date(2025, 1, 1))
    assert [r.id for r in out.completed] == ["x"]
    assert out.overdue == [] and out.pending == []
