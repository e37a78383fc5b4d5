"""Modelos tipados para registros de actividad y vistas derivadas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class RecordState(Enum):
    """Whether a record is a finished visit or an open task."""

    COMPLETED = "completed"
    TASK = "task"

    @classmethod
    def from_flag(cls, is_completed: bool | None) -> RecordState:
        """Resolve the nullable ``is_completed`` column.

        Rows created before the flag existed carry ``None`` and count as
        completed.
        """
        if is_completed is None:
            return cls.COMPLETED
        return cls.COMPLETED if is_completed else cls.TASK


@dataclass(frozen=True)
class ActivityRecord:
    """One activity row as fetched from storage (names already joined)."""

    id: str
    activity_date: date | None
    start_time: str | None = None
    end_time: str | None = None
    task_time: str | None = None
    content: str | None = None
    user_id: str | None = None
    staff_name: str | None = None
    user_name: str | None = None
    activity_type_name: str | None = None
    activity_type_color: str | None = None
    state: RecordState = RecordState.COMPLETED

    @property
    def is_completed(self) -> bool:
        return self.state is RecordState.COMPLETED

    @property
    def is_task(self) -> bool:
        return self.state is RecordState.TASK


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-date range."""

    start: date
    end: date

    def contains(self, day: date | None) -> bool:
        if day is None:
            return False
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CalendarDay:
    """One cell of a month grid."""

    date: date
    is_current_month: bool
    activities: tuple[ActivityRecord, ...] = ()


@dataclass(frozen=True)
class StaffMetric:
    """Activity count and minutes for one staff member."""

    name: str
    count: int
    total_minutes: int


@dataclass(frozen=True)
class TypeMetric:
    """Activity count and minutes for one activity type."""

    name: str
    count: int
    total_minutes: int
    color: str


@dataclass(frozen=True)
class ActivityMetrics:
    """Per-staff and per-type series for one reporting window."""

    window: DateRange | None
    by_staff: list[StaffMetric] = field(default_factory=list)
    by_type: list[TypeMetric] = field(default_factory=list)


@dataclass(frozen=True)
class TaskPartition:
    """Records split into overdue tasks, pending tasks and completed visits."""

    overdue: list[ActivityRecord] = field(default_factory=list)
    pending: list[ActivityRecord] = field(default_factory=list)
    completed: list[ActivityRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.overdue) + len(self.pending) + len(self.completed)


@dataclass(frozen=True)
class Client:
    """A care client (``users`` table)."""

    id: str
    name: str
    master_uid: str | None = None


class ContactTier(Enum):
    """Badge severity for days since last contact."""

    NO_DATA = "no_data"
    OVERDUE = "overdue"
    WARNING = "warning"
    NORMAL = "normal"


@dataclass(frozen=True)
class ClientContact:
    """Dashboard row: a client and how long since the last visit."""

    client: Client
    last_activity_date: date | None
    last_staff_name: str | None
    days_elapsed: int
    tier: ContactTier

    @property
    def is_overdue(self) -> bool:
        return self.tier in (ContactTier.OVERDUE, ContactTier.NO_DATA)
