from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_wall_clock(value: str) -> time:
    """Parse HH:MM string into a local wall-clock time."""
    return datetime.strptime(value, "%H:%M").time()


def combine_local(work_date: date, hhmm: str) -> datetime:
    return datetime.combine(work_date, parse_wall_clock(hhmm))


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_instant(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
