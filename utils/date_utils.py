"""
Date parsing and age arithmetic for the league eligibility system.
"""

import math
from datetime import date, datetime
from typing import Optional

DAYS_PER_YEAR = 365.25


class DateUtils:
    """Utilities for reading stored dates and computing ages."""

    @staticmethod
    def parse_date(value) -> Optional[date]:
        """
        Parse a stored date value.
        Accepts date/datetime objects, ISO strings (YYYY-MM-DD, optionally with a time part)
        and registry-style DD.MM.YYYY strings. Returns None for empty or unparseable values.
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        text = str(value).strip()
        if not text or text.lower() in ('nan', 'nat', 'none', 'null'):
            return None

        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass

        try:
            return datetime.strptime(text, '%d.%m.%Y').date()
        except ValueError:
            return None

    @staticmethod
    def format_date(value: Optional[date]) -> Optional[str]:
        """Format a date for storage (ISO 8601) or return None."""
        if value is None:
            return None
        return value.isoformat()

    @staticmethod
    def age_in_years(birth_date: date, on_date: date) -> int:
        """Whole years between birth_date and on_date, using 365.25-day years."""
        return math.floor((on_date - birth_date).days / DAYS_PER_YEAR)

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Whole days from start to end."""
        return (end - start).days
