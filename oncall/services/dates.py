"""Calendar helpers. Every date is a local calendar day; nothing is shifted by timezone."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import List

import pandas as pd

from oncall.domain.errors import ConfigurationError

MIN_YEAR = 1900
MAX_YEAR = 2100

_YEAR = re.compile(r"\b\d{4}\b")
_NUMBER = re.compile(r"\d+")
_MONTH_NAME = re.compile(r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*", re.IGNORECASE)

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _has_full_date(text: str) -> bool:
    """True when the text spells out a four-digit year, a month and a day."""
    components = len(_NUMBER.findall(text)) + len(_MONTH_NAME.findall(text))
    return bool(_YEAR.search(text)) and components >= 3


def _check_year(day: date, value) -> date:
    if not MIN_YEAR <= day.year <= MAX_YEAR:
        raise ConfigurationError(f"Date {value!r} is outside {MIN_YEAR}-{MAX_YEAR}")
    return day


def parse_local_date(value) -> date:
    """
    Interpret a date-like value as a local calendar day.

    ``YYYY-MM-DD`` strings are split into their components so that
    "2025-01-03" is always January 3rd. Datetimes (including tz-aware
    pandas Timestamps) keep their own wall-clock day. Any other string is
    handed to pandas, but only when it names a four-digit year, a month and
    a day; pandas would otherwise fill the missing parts from defaults.

    Args:
        value: date, datetime, pandas Timestamp or string

    Returns:
        The calendar day as a ``datetime.date``

    Raises:
        ConfigurationError: If the value cannot be read as a full date, or
            a string names a year outside MIN_YEAR..MAX_YEAR
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    parts = text.split("-")
    if len(parts) == 3 and all(p.isdigit() for p in parts):
        try:
            day = date(int(parts[0]), int(parts[1]), int(parts[2]))
        except ValueError as e:
            raise ConfigurationError(f"Invalid date {value!r}: {e}") from e
        return _check_year(day, value)

    if not _has_full_date(text):
        raise ConfigurationError(f"Unrecognized date {value!r}: expected year, month and day")
    try:
        ts = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError) as e:
        raise ConfigurationError(f"Unrecognized date {value!r}") from e
    if pd.isna(ts) or str(ts.year) not in _YEAR.findall(text):
        raise ConfigurationError(f"Unrecognized date {value!r}")
    return _check_year(ts.date(), value)


def normalize_date(value) -> str:
    """Canonical ``YYYY-MM-DD`` string for any date-like value."""
    return parse_local_date(value).isoformat()


def generate_dates(start: date | None, end: date | None) -> List[date]:
    """All days in the inclusive range; empty when unset or inverted."""
    if start is None or end is None:
        return []
    dates = []
    current = start
    while current <= end:
        dates.append(current)
        current += timedelta(days=1)
    return dates


def is_weekend_night(d: date) -> bool:
    """Friday and Saturday nights count as weekend duty."""
    return d.weekday() in (4, 5)


def day_name(d: date) -> str:
    return DAY_NAMES[d.weekday()]


def slot_label(index: int) -> str:
    return chr(ord("a") + index)


def date_number(date_str: str) -> int:
    # "2025-01-03" -> 20250103
    return int(date_str.replace("-", ""))


def week_start(d: date) -> date:
    """Sunday that opens the week containing ``d``."""
    return d - timedelta(days=(d.weekday() + 1) % 7)
