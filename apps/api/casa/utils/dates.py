"""Calendar helpers for age-based case filters."""

from __future__ import annotations

from datetime import date


def years_before(day: date, years: int) -> date:
    """Return the same calendar day `years` earlier.

    Feb 29 maps to Feb 28 when the target year is not a leap year.
    """
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)
