"""Recording date helpers.

Where: src/tagnorm/features/metadata/domain/dates.py
What: Parse ISO date/time text and derive calendar years from free-form year fields.
Why: Year fields hold anything from ``"1999"`` to full timestamps.
"""

from __future__ import annotations

from datetime import date, datetime

__all__ = [
    "format_calendar_year",
    "format_date",
    "parse_calendar_year",
    "parse_date",
    "parse_date_time",
]


def parse_date_time(text: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; a space may separate date and time."""
    if not text:
        return None
    candidate = text.strip().replace(" ", "T", 1)
    if "T" not in candidate:
        return None
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def parse_date(text: str | None) -> date | None:
    """Parse an ISO 8601 calendar date (``YYYY-MM-DD``)."""
    if not text:
        return None
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def format_date(value: date) -> str:
    return value.isoformat()


def parse_calendar_year(text: str | None) -> int | None:
    """Extract a positive calendar year from timestamp, date or leading digits."""
    if not text:
        return None
    date_time = parse_date_time(text)
    if date_time is not None:
        return date_time.year
    parsed_date = parse_date(text)
    if parsed_date is not None:
        return parsed_date.year
    head = text.strip().split("-", 1)[0].strip()
    try:
        year = int(head)
    except ValueError:
        return None
    return year if year > 0 else None


def format_calendar_year(text: str | None) -> str:
    """Return the calendar year of ``text`` as a string, ``""`` if none."""
    year = parse_calendar_year(text)
    return str(year) if year is not None else ""
