from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> Optional[tuple[int, int]]:
    """Parse a YYYY-MM string into ``(year, month)``.

    Returns None for anything that is not a valid calendar month.
    """
    if not value:
        return None
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        return None
    return parsed.year, parsed.month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> list[date]:
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def last_n_days(today: date, n: int) -> list[date]:
    """The ``n`` days ending at ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def format_clock(value: datetime) -> str:
    return value.strftime("%H:%M")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()


def now_local() -> datetime:
    return datetime.now()
