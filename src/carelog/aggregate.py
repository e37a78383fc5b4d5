"""Agregación de actividades por personal y por tipo (series para gráficos)."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from carelog.config import DEFAULT_CONFIG, EngineConfig
from carelog.model import (
    ActivityMetrics,
    ActivityRecord,
    DateRange,
    StaffMetric,
    TypeMetric,
)
from carelog.timemath import duration_minutes

_ROW_COLUMNS = ["id", "staff_name", "type_name", "color", "minutes"]


def _label(value: str | None) -> str | None:
    """Nombre vacío cuenta como ausente; no se normaliza."""
    return value if value else None


def records_to_frame(
    records: Iterable[ActivityRecord], *, config: EngineConfig = DEFAULT_CONFIG
) -> pd.DataFrame:
    """One row per record with its grouping keys and duration in minutes."""
    rows = [
        {
            "id": r.id,
            "staff_name": _label(r.staff_name),
            "type_name": _label(r.activity_type_name),
            "color": r.activity_type_color or config.default_type_color,
            "minutes": duration_minutes(r.start_time, r.end_time) or 0,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=_ROW_COLUMNS)


def _group(df: pd.DataFrame, key: str, **extra: tuple[str, str]) -> list[dict]:
    if df[key].isna().all():
        return []
    g = df.groupby(key, sort=False, dropna=True).agg(
        count=("id", "size"),
        total_minutes=("minutes", "sum"),
        **extra,
    )
    g["total_minutes"] = g["total_minutes"].round().astype(int)
    return g.reset_index().to_dict("records")


def aggregate(
    records: Iterable[ActivityRecord],
    window: DateRange | None = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ActivityMetrics:
    """Roll records up by staff member and by activity type.

    Records are not filtered here; callers pass the window's records and
    the window is only carried into the result. A record without a staff
    name is left out of the staff series only (same for types). Records
    with missing or invalid times count but add no minutes.

    Args:
        records: Activity records already restricted to ``window``.
        window: Reporting window the records belong to.
        config: Engine configuration (default type colour).

    Returns:
        Staff and type series in order of first appearance.
    """
    df = records_to_frame(records, config=config)
    if df.empty:
        return ActivityMetrics(window=window)

    by_staff = [
        StaffMetric(
            name=str(row["staff_name"]),
            count=int(row["count"]),
            total_minutes=int(row["total_minutes"]),
        )
        for row in _group(df, "staff_name")
    ]
    by_type = [
        TypeMetric(
            name=str(row["type_name"]),
            count=int(row["count"]),
            total_minutes=int(row["total_minutes"]),
            color=str(row["color"]),
        )
        for row in _group(df, "type_name", color=("color", "first"))
    ]
    return ActivityMetrics(window=window, by_staff=by_staff, by_type=by_type)


def metrics_to_frames(metrics: ActivityMetrics) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Convert metrics to (staff, type) DataFrames for export."""
    staff_df = pd.DataFrame(
        [(m.name, m.count, m.total_minutes) for m in metrics.by_staff],
        columns=["name", "count", "total_minutes"],
    )
    type_df = pd.DataFrame(
        [(m.name, m.count, m.total_minutes, m.color) for m in metrics.by_type],
        columns=["name", "count", "total_minutes", "color"],
    )
    return staff_df, type_df
