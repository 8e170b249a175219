"""Date helpers shared by the store and the UI.

Review dates travel as ISO strings (YYYY-MM-DD), which sort lexicographically.
Unlike the codec, parse_iso_date is strict and raises on bad input.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from pathlib import Path

from lifeos.workspace import today_str

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_iso_date(value: str) -> date:
    """Parse 'YYYY-MM-DD' into a date.

    Raises ValueError for a bad format, month or day.
    """
    if not isinstance(value, str) or not _ISO_DATE_RE.fullmatch(value):
        raise ValueError(f"Invalid date format: {value!r}. Expected YYYY-MM-DD.")
    year, month, day = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}. Must be between 1 and 12.")
    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= day <= days_in_month:
        raise ValueError(
            f"Invalid day: {day}. Must be between 1 and {days_in_month} for {value[:7]}."
        )
    return date(year, month, day)


def format_date_for_form(d: date) -> str:
    return d.isoformat()


def format_display_date(d: date) -> str:
    """Locale-independent display form, e.g. 'Jan 15, 2026'."""
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def compare_dates(a: str, b: str) -> int:
    """-1, 0 or 1 comparing two ISO date strings."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def is_today(value: str, root: Path | None = None) -> bool:
    return value == today_str(root)


def week_start(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def iso_week_number(d: date) -> int:
    return d.isocalendar()[1]
