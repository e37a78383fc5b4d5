"""Clases base para fuentes de registros y conversión de filas exportadas."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, cast

import pandas as pd

from carelog.model import ActivityRecord, RecordState

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "t", "1", "yes"}
_FALSE_VALUES = {"false", "f", "0", "no"}
_LEGACY_FIELDS = (
    "has_next_appointment",
    "next_appointment_date",
    "next_appointment_content",
)


@dataclass(frozen=True)
class ExportPaths:
    """Location of an exported table."""

    path: Path


class DataSource(ABC):
    """Abstract source of activity records."""

    def __init__(self, paths: ExportPaths) -> None:
        """Create a data source.

        Args:
            paths: Export file location.
        """
        self._paths = paths

    def validate(self) -> None:
        """Validate that the export file exists.

        Raises:
            FileNotFoundError: If the file is missing.
        """
        if not self._paths.path.is_file():
            raise FileNotFoundError(str(self._paths.path))

    @abstractmethod
    def load_records(self) -> list[ActivityRecord]:
        """Read every activity record of the export."""


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    return isinstance(value, str) and not value.strip()


def parse_flag(value: Any) -> bool | None:
    """Parsea un booleano exportado (JSON o texto CSV); vacío -> None."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def parse_date(value: Any) -> date | None:
    """Parse an exported ``activity_date``; invalid values give None."""
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return cast(date, parsed.date())


def _text(value: Any) -> str | None:
    if is_blank(value):
        return None
    return str(value)


def _joined(row: Mapping[str, Any], relation: str, key: str, flat: str) -> str | None:
    """Lee un nombre unido: ``{"staff": {"name": ..}}`` o columna plana."""
    nested = row.get(relation)
    if isinstance(nested, Mapping):
        return _text(nested.get(key))
    return _text(row.get(flat))


def row_to_record(row: Mapping[str, Any]) -> ActivityRecord | None:
    """Convert one exported ``activity_records`` row to a record.

    The nullable ``is_completed`` flag is resolved here, once.

    Returns:
        The record, or None when the row has no id.
    """
    record_id = _text(row.get("id"))
    if record_id is None:
        logger.warning("Skipping activity row without id: %r", dict(row))
        return None

    legacy = {k: row[k] for k in _LEGACY_FIELDS if not is_blank(row.get(k))}
    if parse_flag(legacy.get("has_next_appointment")):
        logger.info(
            "Ignoring legacy next-appointment fields on %s: %r", record_id, legacy
        )

    return ActivityRecord(
        id=record_id,
        activity_date=parse_date(row.get("activity_date")),
        start_time=_text(row.get("start_time")),
        end_time=_text(row.get("end_time")),
        task_time=_text(row.get("task_time")),
        content=_text(row.get("content")),
        user_id=_text(row.get("user_id")),
        staff_name=_joined(row, "staff", "name", "staff_name"),
        user_name=_joined(row, "users", "name", "user_name"),
        activity_type_name=_joined(
            row, "activity_types", "name", "activity_type_name"
        ),
        activity_type_color=_joined(
            row, "activity_types", "color", "activity_type_color"
        ),
        state=RecordState.from_flag(parse_flag(row.get("is_completed"))),
    )
