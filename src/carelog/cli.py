"""CLI para generar el reporte mensual de actividades (calendario + métricas)."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, time
from pathlib import Path

from dateutil import tz

from carelog.aggregate import aggregate
from carelog.config import EngineConfig
from carelog.dashboard import overdue_count, summarize_clients
from carelog.excel_writer import ActivityReport, ExcelLayout, write_activity_xlsx
from carelog.model import ActivityRecord
from carelog.month_grid import build_month_grid
from carelog.sources.base import DataSource
from carelog.sources.csv_export import CsvExportPaths, CsvExportSource
from carelog.sources.json_export import JsonExportPaths, JsonExportSource, load_clients
from carelog.tasks import partition
from carelog.timemath import parse_time_of_day
from carelog.windows import ReportRange, range_bounds, records_in_range

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Reporte mensual de visitas: calendario, tareas y métricas."
    )
    parser.add_argument(
        "--records",
        required=True,
        help="Exportación de activity_records (.json o .csv).",
    )
    parser.add_argument(
        "--clients",
        default=None,
        help="Exportación JSON de users (opcional).",
    )
    parser.add_argument(
        "--month",
        default=None,
        help="Mes del calendario YYYY-MM (default: mes actual).",
    )
    parser.add_argument(
        "--range",
        default=ReportRange.THIS_MONTH.value,
        choices=[r.value for r in ReportRange],
        help="Ventana de métricas (default: this_month).",
    )
    parser.add_argument(
        "--out-dir",
        default=str(Path.cwd() / "salidas"),
        help="Directorio de salida (default: ./salidas).",
    )
    parser.add_argument("--today", default=None, help="Fecha de referencia YYYY-MM-DD.")
    parser.add_argument(
        "--tz",
        default="Asia/Tokyo",
        help="Zona horaria para calcular 'hoy' (default: Asia/Tokyo).",
    )
    parser.add_argument(
        "--week-start",
        type=int,
        default=0,
        help="Primer día de la semana en la grilla, 0 = domingo.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log DEBUG.")
    return parser.parse_args()


def _parse_month(value: str) -> tuple[int, int]:
    """Parsea 'YYYY-MM'."""
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError as exc:
        raise ValueError(f"Invalid --month {value!r}, expected YYYY-MM") from exc
    return parsed.year, parsed.month


def _record_order(record: ActivityRecord) -> tuple[date, bool, time]:
    """Por fecha y hora de inicio; sin hora primero."""
    start = parse_time_of_day(record.start_time)
    return (
        record.activity_date or date.min,
        start is not None,
        start or time.min,
    )


def _source_for(path: Path) -> DataSource:
    if path.suffix.lower() == ".csv":
        return CsvExportSource(CsvExportPaths(path=path))
    return JsonExportSource(JsonExportPaths(path=path))


def main() -> int:
    """Run the report CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    local_tz = tz.gettz(ns.tz)
    if local_tz is None:
        raise ValueError(f"Unknown time zone: {ns.tz}")
    if ns.today:
        today = date.fromisoformat(ns.today)
    else:
        today = datetime.now(tz=local_tz).date()
    year, month = _parse_month(ns.month) if ns.month else (today.year, today.month)
    config = EngineConfig(week_start=ns.week_start)

    records_path = Path(ns.records).expanduser().resolve()
    source = _source_for(records_path)
    source.validate()
    records = source.load_records()
    clients = load_clients(Path(ns.clients).expanduser()) if ns.clients else []
    logger.info("Loaded %d record(s), %d client(s)", len(records), len(clients))

    grid = build_month_grid(
        year, month, sorted(records, key=_record_order), config=config
    )
    window = range_bounds(ReportRange.parse(ns.range), today)
    metrics = aggregate(records_in_range(records, window), window, config=config)
    tasks = partition(records, today)
    contacts = summarize_clients(clients, records, today, config=config)

    out_dir = Path(ns.out_dir).expanduser().resolve()
    ts = datetime.now(tz=local_tz).strftime("%Y-%m-%d_%H-%M-%S")
    out_path = out_dir / f"actividades_{year:04d}-{month:02d}_{ts}.xlsx"
    report = ActivityReport(
        year=year,
        month=month,
        grid=grid,
        metrics=metrics,
        today=today,
        contacts=contacts,
    )
    write_activity_xlsx(report, out_path, ExcelLayout())

    print(f"OK: Records file: {records_path}")
    print(f"OK: Records: {len(records)}")
    print(
        f"OK: Tasks: {len(tasks.overdue)} overdue, {len(tasks.pending)} pending, "
        f"{len(tasks.completed)} completed"
    )
    print(f"OK: Overdue clients: {overdue_count(contacts)}")
    print(f"OK: Output: {out_path}")
    return 0
