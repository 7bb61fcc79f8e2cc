from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso_date(value: Optional[date]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def parse_clock_time(value: str) -> time:
    """Parse HH:MM or HH:MM:SS."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def format_slot_label(value: time) -> str:
    """12-hour label used as the default slot label, e.g. ``08:00 AM``."""
    suffix = "PM" if value.hour >= 12 else "AM"
    hour = value.hour % 12 or 12
    return f"{hour:02d}:{value.minute:02d} {suffix}"


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
