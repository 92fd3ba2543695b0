from datetime import date, datetime

import pandas as pd
import pytest

from lattice_pricing.options import (
    Actual365Fixed,
    InvalidDateRangeError,
    coerce_date,
    year_fraction,
)


def test_year_fraction_counts_actual_days_over_365():
    assert year_fraction(date(2023, 1, 1), date(2024, 1, 1)) == pytest.approx(1.0)
    assert year_fraction(date(2024, 1, 1), date(2025, 1, 1)) == pytest.approx(
        366 / 365.0
    )
    assert year_fraction(date(2024, 3, 1), date(2024, 3, 31)) == pytest.approx(
        30 / 365.0
    )


def test_year_fraction_same_day_is_zero():
    assert year_fraction(date(2024, 6, 3), date(2024, 6, 3)) == 0.0


def test_year_fraction_rejects_reversed_range():
    with pytest.raises(InvalidDateRangeError, match="precedes"):
        year_fraction(date(2025, 1, 1), date(2024, 1, 1))


def test_actual_365_fixed_day_count_and_string_inputs():
    counter = Actual365Fixed()

    assert counter.day_count("2024-02-01", "2024-03-01") == 29
    assert counter.year_fraction("2024-02-01", "2024-03-01") == pytest.approx(
        29 / 365.0
    )


@pytest.mark.parametrize(
    "value",
    [
        date(2024, 1, 15),
        datetime(2024, 1, 15, 16, 30),
        pd.Timestamp("2024-01-15 09:00"),
        "2024-01-15",
        (2024, 1, 15),
    ],
)
def test_coerce_date_accepts_boundary_inputs(value):
    assert coerce_date(value) == date(2024, 1, 15)


@pytest.mark.parametrize("value", ["2024-02-30", "not a date", (2024, 13, 1), None])
def test_coerce_date_rejects_invalid_inputs(value):
    with pytest.raises(InvalidDateRangeError, match="Invalid date input"):
        coerce_date(value)
