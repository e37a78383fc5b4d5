"""Resumen de contacto por cliente para el tablero principal."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import cast

from carelog.config import DEFAULT_CONFIG, EngineConfig
from carelog.elapsed import contact_tier, days_elapsed
from carelog.model import ActivityRecord, Client, ClientContact


def _last_visits(records: Iterable[ActivityRecord]) -> dict[str, ActivityRecord]:
    """Último registro completado (con fecha) por cliente."""
    latest: dict[str, ActivityRecord] = {}
    for record in records:
        if not record.is_completed or record.activity_date is None:
            continue
        if record.user_id is None:
            continue
        current = latest.get(record.user_id)
        if current is None or record.activity_date > cast(date, current.activity_date):
            latest[record.user_id] = record
    return latest


def summarize_clients(
    clients: Sequence[Client],
    records: Iterable[ActivityRecord],
    today: date,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[ClientContact]:
    """Build the "days since last visit" list for the dashboard.

    Only completed visits count as contact; open tasks do not. Clients are
    returned longest-without-contact first, and clients never visited
    (sentinel 999) end up at the top.

    Args:
        clients: Active clients, typically ordered by name.
        records: Activity records of any period.
        today: Reference date.
        config: Engine configuration.

    Returns:
        One contact row per client.
    """
    latest = _last_visits(records)
    out: list[ClientContact] = []
    for client in clients:
        last = latest.get(client.id)
        last_date = last.activity_date if last else None
        days = days_elapsed(last_date, today, config=config)
        out.append(
            ClientContact(
                client=client,
                last_activity_date=last_date,
                last_staff_name=last.staff_name if last else None,
                days_elapsed=days,
                tier=contact_tier(days, config=config),
            )
        )
    out.sort(key=lambda c: c.days_elapsed, reverse=True)
    return out


def overdue_count(contacts: Iterable[ClientContact]) -> int:
    """Number of clients flagged overdue (never-visited clients included)."""
    return sum(1 for c in contacts if c.is_overdue)


def filter_by_last_staff(
    contacts: Iterable[ClientContact], staff_name: str | None
) -> list[ClientContact]:
    """Clients whose last visit was made by ``staff_name`` (None keeps all)."""
    if staff_name is None:
        return list(contacts)
    return [c for c in contacts if c.last_staff_name == staff_name]
