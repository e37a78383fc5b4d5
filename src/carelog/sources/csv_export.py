"""Lectura de exportaciones CSV planas de ``activity_records``."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from carelog.model import ActivityRecord
from carelog.sources.base import DataSource, ExportPaths, row_to_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = ("id", "activity_date")


@dataclass(frozen=True)
class CsvExportPaths(ExportPaths):
    """Path of a flat CSV export."""

    # path: CSV with staff_name / user_name / activity_type_name columns


class CsvExportSource(DataSource):
    """Activity records from a flat CSV (joined names as columns)."""

    def load_records(self) -> list[ActivityRecord]:
        """Load records from the CSV.

        Returns:
            Records in file order.

        Raises:
            ValueError: If a required column is missing.
        """
        # Only empty fields are missing; "NA" or "None" are real names.
        df = pd.read_csv(
            self._paths.path, dtype=str, keep_default_na=False, na_values=[""]
        )
        df = df.rename(columns={c: c.strip() for c in df.columns})
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(
                f"{self._paths.path.name}: missing columns {', '.join(missing)}"
            )

        out: list[ActivityRecord] = []
        for row in df.to_dict("records"):
            record = row_to_record(row)
            if record is not None:
                out.append(record)
        logger.debug("Loaded %d record(s) from %s", len(out), self._paths.path)
        return out
