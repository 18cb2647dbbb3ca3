"""Calendar helpers for ages and trip lengths.

Two trip-length conventions coexist on purpose: pricing and underwriting
count nights (``end - start``), validation counts calendar days including
both ends (``end - start + 1``).
"""

from datetime import date

from beartype import beartype


@beartype
def full_years_between(start: date, end: date) -> int:
    """Whole years from ``start`` to ``end`` (negative when ``end`` is earlier)."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


@beartype
def trip_days(start: date, end: date) -> int:
    """Trip length used for pricing and underwriting (end exclusive)."""
    return (end - start).days


@beartype
def trip_days_inclusive(start: date, end: date) -> int:
    """Trip length used by validation (both ends counted)."""
    return (end - start).days + 1
