"""Días transcurridos desde el último contacto y su clasificación."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from carelog.config import DEFAULT_CONFIG, EngineConfig
from carelog.model import ContactTier


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_elapsed(
    last_activity_date: date | datetime | None,
    today: date | datetime,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Whole days between the last activity and today.

    Two datetimes give the floor of their difference in days (23 hours is 0).
    Any other pair is compared as calendar dates.

    Returns:
        Elapsed days, or ``config.no_record_days`` (999) when there is no
        activity at all.
    """
    if last_activity_date is None:
        return config.no_record_days
    if isinstance(last_activity_date, datetime) and isinstance(today, datetime):
        return (today - last_activity_date) // timedelta(days=1)
    return (_as_date(today) - _as_date(last_activity_date)).days


def is_overdue(days: int, *, config: EngineConfig = DEFAULT_CONFIG) -> bool:
    """Raw overdue rule (``days > 90``); the 999 sentinel also matches."""
    return days > config.overdue_days


def contact_tier(days: int, *, config: EngineConfig = DEFAULT_CONFIG) -> ContactTier:
    """Classify elapsed days for badge display.

    The sentinel is checked first so "never visited" is not shown as a
    day count.
    """
    if days == config.no_record_days:
        return ContactTier.NO_DATA
    if is_overdue(days, config=config):
        return ContactTier.OVERDUE
    if days > config.warning_days:
        return ContactTier.WARNING
    return ContactTier.NORMAL
