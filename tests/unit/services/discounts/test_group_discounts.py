"""Tests for group and corporate discounts."""

from decimal import Decimal

import pytest

from travel_insurance.core.config import Settings
from travel_insurance.models.discount import DiscountType
from travel_insurance.services.discounts.group_discounts import GroupDiscountService


@pytest.fixture
def service():
    return GroupDiscountService(Settings())


class TestGroupDiscount:
    """Party-size tiers."""

    @pytest.mark.parametrize(
        "persons,code,amount",
        [
            (5, "GROUP_5", "20.00"),
            (10, "GROUP_10", "30.00"),
            (19, "GROUP_10", "30.00"),
            (25, "GROUP_20", "40.00"),
        ],
    )
    def test_highest_tier(self, service, persons, code, amount):
        discount = service.group_discount(Decimal("200.00"), persons)

        assert discount is not None
        assert discount.code == code
        assert discount.amount == Decimal(amount)

    def test_small_party(self, service):
        assert service.group_discount(Decimal("200.00"), 4) is None


class TestCorporateDiscount:
    """Corporate clients above the premium threshold."""

    def test_below_threshold(self, service):
        assert service.corporate_discount(Decimal("99.99"), True) is None

    def test_at_threshold(self, service):
        discount = service.corporate_discount(Decimal("100.00"), True)

        assert discount is not None
        assert discount.discount_type == DiscountType.CORPORATE
        assert discount.amount == Decimal("20.00")

    def test_not_corporate(self, service):
        assert service.corporate_discount(Decimal("500.00"), False) is None


class TestBestDiscount:
    """Group and corporate never stack."""

    def test_corporate_beats_small_group(self, service):
        best = service.best_discount(Decimal("200.00"), 5, True)

        assert best is not None
        assert best.code == "CORPORATE"
        assert best.amount == Decimal("40.00")

    def test_group_when_corporate_threshold_missed(self, service):
        best = service.best_discount(Decimal("80.00"), 10, True)

        assert best is not None
        assert best.code == "GROUP_10"

    def test_none(self, service):
        assert service.best_discount(Decimal("80.00"), 1, False) is None
