"""Actual/365 Fixed day counting and date coercion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TypeAlias

import pandas as pd

from lattice_pricing.options.errors import InvalidDateRangeError

# Tolerant date input accepted at system boundaries (config files/CLI/tests).
DateInput: TypeAlias = date | datetime | pd.Timestamp | str | tuple[int, int, int]

DAYS_PER_YEAR: float = 365.0


def coerce_date(value: DateInput) -> date:
    """Normalize a date-like input into a `datetime.date`.

    Tuples are read as `(year, month, day)` on the proleptic Gregorian
    calendar. Time-of-day components are dropped.

    Raises:
        InvalidDateRangeError: If the value cannot be read as a calendar date.
    """
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        if isinstance(value, tuple):
            year, month, day = value
            return date(int(year), int(month), int(day))
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDateRangeError(f"Invalid date input: {value!r}") from exc

    if pd.isna(ts):
        raise InvalidDateRangeError(f"Invalid date input: {value!r}")
    return ts.date()


@dataclass(frozen=True)
class Actual365Fixed:
    """Actual/365 Fixed convention without any calendar adjustment."""

    days_per_year: float = DAYS_PER_YEAR

    def day_count(self, start: DateInput, end: DateInput) -> int:
        return (coerce_date(end) - coerce_date(start)).days

    def year_fraction(self, start: DateInput, end: DateInput) -> float:
        """Return `(end - start in days) / 365`.

        Raises:
            InvalidDateRangeError: If `end` precedes `start`.
        """
        start_d = coerce_date(start)
        end_d = coerce_date(end)
        if end_d < start_d:
            raise InvalidDateRangeError(
                f"end date {end_d.isoformat()} precedes start date "
                f"{start_d.isoformat()}"
            )
        return (end_d - start_d).days / self.days_per_year


ACT_365_FIXED = Actual365Fixed()


def year_fraction(start: DateInput, end: DateInput) -> float:
    """Actual/365 Fixed year fraction between two dates."""
    return ACT_365_FIXED.year_fraction(start, end)
