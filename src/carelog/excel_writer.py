"""Generación de Excel formateado con el reporte mensual de actividades."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from carelog.aggregate import metrics_to_frames
from carelog.model import ActivityMetrics, CalendarDay, ClientContact, ContactTier
from carelog.month_grid import summarize_day
from carelog.timemath import format_minutes

# Índice 0 = domingo, igual que week_start.
_DIA_SEMANA: tuple[str, ...] = ("dom", "lun", "mar", "mie", "jue", "vie", "sab")

_TIER_LABEL: dict[ContactTier, str] = {
    ContactTier.NO_DATA: "Sin registro",
    ContactTier.OVERDUE: "Vencido",
    ContactTier.WARNING: "Atención",
    ContactTier.NORMAL: "Normal",
}

_STAFF_HEADERS: dict[str, str] = {
    "name": "Personal",
    "count": "Registros",
    "total_minutes": "Minutos totales",
    "hours": "Tiempo (h:mm)",
}

_TYPE_HEADERS: dict[str, str] = {
    "name": "Tipo",
    "count": "Registros",
    "total_minutes": "Minutos totales",
    "hours": "Tiempo (h:mm)",
}

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class ExcelLayout:
    """Sheet names of the activity report."""

    calendar_sheet: str = "Calendario"
    staff_sheet: str = "Por personal"
    type_sheet: str = "Por tipo"
    clients_sheet: str = "Clientes"


@dataclass(frozen=True)
class ActivityReport:
    """Everything the monthly report shows."""

    year: int
    month: int
    grid: Sequence[CalendarDay]
    metrics: ActivityMetrics
    today: date
    contacts: Sequence[ClientContact] = field(default_factory=tuple)


def _with_hours(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["hours"] = df["total_minutes"].map(format_minutes)
    return df


def _contacts_frame(contacts: Sequence[ClientContact]) -> pd.DataFrame:
    """Una fila por cliente; los días del centinela se muestran como '---'."""
    rows = [
        {
            "Cliente": c.client.name,
            "Último contacto": c.last_activity_date,
            "Último personal": c.last_staff_name or "",
            "Días": "---" if c.tier is ContactTier.NO_DATA else c.days_elapsed,
            "Estado": _TIER_LABEL[c.tier],
        }
        for c in contacts
    ]
    return pd.DataFrame(
        rows,
        columns=["Cliente", "Último contacto", "Último personal", "Días", "Estado"],
    )


def write_activity_xlsx(
    report: ActivityReport, out_path: Path, layout: ExcelLayout
) -> None:
    """Write the monthly activity report.

    Args:
        report: Grid, metrics and client contacts to export.
        out_path: Output path for the XLSX file.
        layout: Sheet names.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    staff_df, type_df = metrics_to_frames(report.metrics)
    colors = list(type_df["color"])
    staff_df = _with_hours(staff_df).rename(columns=_STAFF_HEADERS)
    type_df = _with_hours(type_df.drop(columns=["color"])).rename(columns=_TYPE_HEADERS)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        staff_df.to_excel(writer, index=False, sheet_name=layout.staff_sheet)
        type_df.to_excel(writer, index=False, sheet_name=layout.type_sheet)
        _contacts_frame(report.contacts).to_excel(
            writer, index=False, sheet_name=layout.clients_sheet
        )
        book = writer.book
        cal_ws = book.create_sheet(layout.calendar_sheet, 0)
        _write_calendar(cal_ws, report.grid, report.today)

        for name in (layout.staff_sheet, layout.type_sheet, layout.clients_sheet):
            _format_sheet(book[name])
        _fill_type_colors(book[layout.type_sheet], colors)


def _day_text(day: CalendarDay, today: date) -> str:
    """Número del día y, si hay registros, vencidas / pendientes / hechas."""
    lines = [str(day.date.day)]
    if day.activities:
        tasks = summarize_day(day, today)
        for label, items in (
            ("vencidas", tasks.overdue),
            ("pendientes", tasks.pending),
            ("hechas", tasks.completed),
        ):
            if items:
                lines.append(f"{label}: {len(items)}")
    return "\n".join(lines)


def _write_calendar(ws: Any, grid: Sequence[CalendarDay], today: date) -> None:
    """Escribe la grilla: cabecera de días y una fila por semana."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    top_left = Alignment(horizontal="left", vertical="top", wrap_text=True)
    muted = Font(color="999999")

    for col, day in enumerate(grid[:7], start=1):
        label = _DIA_SEMANA[(day.date.weekday() + 1) % 7]
        cell = ws.cell(row=1, column=col, value=label)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")
        cell.border = border
        ws.column_dimensions[cell.column_letter].width = 14

    for idx, day in enumerate(grid):
        row, col = divmod(idx, 7)
        cell = ws.cell(row=row + 2, column=col + 1, value=_day_text(day, today))
        cell.alignment = top_left
        cell.border = border
        if not day.is_current_month:
            cell.font = muted
        ws.row_dimensions[row + 2].height = 60


def _fill_type_colors(ws: Any, colors: Sequence[str]) -> None:
    """Pinta la celda del nombre de cada tipo con su color."""
    for row_idx, raw in enumerate(colors, start=2):
        match = _HEX_COLOR.match(str(raw))
        if match is None:
            continue
        rgb = match.group(1).upper()
        ws.cell(row=row_idx, column=1).fill = PatternFill(
            fill_type="solid", start_color=rgb, end_color=rgb
        )


def _style_header_row(ws: Any) -> None:
    """Aplica fuente negrita, alineación y borde a la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    """Aplica alineación y borde a las filas de datos."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border


def _get_header_col_index(ws: Any) -> dict[str, int]:
    """Devuelve mapa nombre de cabecera -> índice de columna (1-based)."""
    headers = [str(cell.value) for cell in ws[1]]
    return {name: idx + 1 for idx, name in enumerate(headers)}


def _apply_column_widths(ws: Any, col_index: dict[str, int]) -> None:
    """Establece anchos de columna para evitar ###."""
    widths = [
        ("Personal", 18),
        ("Tipo", 18),
        ("Cliente", 20),
        ("Registros", 10),
        ("Minutos totales", 14),
        ("Tiempo (h:mm)", 12),
        ("Último contacto", 14),
        ("Último personal", 18),
        ("Días", 8),
        ("Estado", 12),
    ]
    for header, width in widths:
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = width


def _apply_number_formats(ws: Any, col_index: dict[str, int]) -> None:
    """Aplica formatos numéricos por cabecera."""
    fmt_map: dict[str, str] = {
        "Registros": "#,##0",
        "Minutos totales": "#,##0",
        "Último contacto": "dd/mm/yyyy",
    }
    for row in ws.iter_rows(min_row=2):
        for header, fmt in fmt_map.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx - 1].number_format = fmt


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    col_index = _get_header_col_index(ws)
    _apply_column_widths(ws, col_index)
    _apply_number_formats(ws, col_index)
