from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from ..core.enums import ReportPeriod


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO 8601 timestamp. A trailing 'Z' is accepted and dropped."""
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1]
    return datetime.fromisoformat(v)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def period_window(period: ReportPeriod, reference: date) -> tuple[date, date]:
    """Inclusive (start, end) dates of the period containing ``reference``.

    Weeks run Monday to Sunday.
    """
    if period == ReportPeriod.DAY:
        return reference, reference
    if period == ReportPeriod.WEEK:
        start = reference - timedelta(days=reference.weekday())
        return start, start + timedelta(days=6)
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)
