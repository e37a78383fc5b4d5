"""Separación de registros en tareas vencidas, pendientes y completadas."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from carelog.model import ActivityRecord, TaskPartition


def partition(records: Iterable[ActivityRecord], today: date) -> TaskPartition:
    """Split records into overdue tasks, pending tasks and completed visits.

    Every record lands in exactly one list, keeping input order. A task with
    no date cannot be late and is treated as pending.

    Args:
        records: Activity records.
        today: Reference date supplied by the caller.

    Returns:
        The three-way partition.
    """
    out = TaskPartition()
    for record in records:
        if record.is_completed:
            out.completed.append(record)
        elif record.activity_date is not None and record.activity_date < today:
            out.overdue.append(record)
        else:
            out.pending.append(record)
    return out
