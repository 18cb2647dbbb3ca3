"""Tests for calendar and decimal helpers."""

from datetime import date
from decimal import Decimal

import pytest

from travel_insurance.core.dates import full_years_between, trip_days, trip_days_inclusive
from travel_insurance.core.money import percentage_of, round_money


class TestFullYearsBetween:
    """Age in whole years."""

    @pytest.mark.parametrize(
        "birth,as_of,expected",
        [
            (date(1990, 5, 15), date(2025, 5, 14), 34),
            (date(1990, 5, 15), date(2025, 5, 15), 35),
            (date(2000, 2, 29), date(2025, 2, 28), 24),
            (date(2000, 2, 29), date(2025, 3, 1), 25),
            (date(2025, 7, 1), date(2025, 7, 1), 0),
        ],
    )
    def test_birthday_boundaries(self, birth, as_of, expected):
        assert full_years_between(birth, as_of) == expected


class TestTripDays:
    """Trip length conventions."""

    def test_pricing_counts_nights(self):
        assert trip_days(date(2025, 7, 1), date(2025, 7, 15)) == 14

    def test_same_day_trip(self):
        assert trip_days(date(2025, 7, 1), date(2025, 7, 1)) == 0
        assert trip_days_inclusive(date(2025, 7, 1), date(2025, 7, 1)) == 1

    def test_validation_counts_both_ends(self):
        assert trip_days_inclusive(date(2025, 1, 1), date(2025, 12, 31)) == 365


class TestMoney:
    """Rounding to cents."""

    def test_round_half_up(self):
        assert round_money(Decimal("0.005")) == Decimal("0.01")
        assert round_money(Decimal("2.675")) == Decimal("2.68")
        assert round_money(Decimal("26.6049")) == Decimal("26.60")

    def test_percentage_of(self):
        """Test percentage points are divided by 100."""
        assert percentage_of(Decimal("200.00"), Decimal("15")) == Decimal("30.00")
        assert percentage_of(Decimal("33.33"), Decimal("10")) == Decimal("3.33")
