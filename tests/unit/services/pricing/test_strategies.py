"""Tests for premium calculation strategies and their selection."""

from datetime import date
from decimal import Decimal

import pytest

from travel_insurance.core.config import Settings
from travel_insurance.core.exceptions import ConfigurationError
from travel_insurance.models.quote import CalculationMode
from travel_insurance.models.reference import Country, CoverageLevel, RiskGroup
from travel_insurance.services.pricing.strategies import (
    PremiumCalculationService,
    select_calculation_mode,
)
from travel_insurance.services.validation.base import ValidationContext

START = date(2020, 1, 1)


def _spain(coefficient):
    return Country(
        iso_code="ES",
        name="Spain",
        risk_group=RiskGroup.LOW,
        risk_coefficient=Decimal(coefficient),
        valid_from=START,
    )


class TestCoverageLevelStrategy:
    """Daily rate × coefficients × nights."""

    def test_unit_coefficients(self, unit_repository, make_request):
        """Test 2.00 per day for 14 nights with every coefficient at 1.0."""
        result = PremiumCalculationService(unit_repository, Settings()).calculate(
            make_request()
        )

        assert result.calculation_mode == CalculationMode.COVERAGE_LEVEL
        assert result.days == 14
        assert result.premium_before_discount == Decimal("28.00")
        assert result.final_premium == Decimal("28.00")
        assert result.coverage_amount == Decimal("10000")
        assert result.payout_limit is not None
        assert not result.payout_limit.was_applied
        assert [d.risk_code for d in result.risk_details] == ["TRAVEL_MEDICAL"]
        assert result.formula.endswith("= 28.00")

    def test_seeded_tariff(self, seeded_repository, make_request):
        """Test age 35 (1.1), Spain (1.0) and 14 nights (0.95)."""
        result = PremiumCalculationService(seeded_repository, Settings()).calculate(
            make_request()
        )

        assert result.age == 35
        assert result.age_coefficient == Decimal("1.1")
        assert result.duration_coefficient == Decimal("0.95")
        assert result.final_premium == Decimal("29.26")
        assert result.calculation_steps[0].result == Decimal("2.00")

    def test_country_coefficient_applied(self, repository_factory, make_request):
        repository = repository_factory(countries=[_spain("1.5")])

        result = PremiumCalculationService(repository, Settings()).calculate(make_request())

        assert result.final_premium == Decimal("42.00")

    def test_risks_and_bundle(self, unit_repository, make_request):
        """Test sport + accident adds 0.5 and earns the 15% bundle."""
        request = make_request(selected_risks=["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"])

        result = PremiumCalculationService(unit_repository, Settings()).calculate(request)

        assert result.additional_risks_coefficient == Decimal("0.50")
        assert result.premium_before_discount == Decimal("42.00")
        assert result.bundle_discount.discount_amount == Decimal("6.30")
        assert result.final_premium == Decimal("35.70")
        assert [d.risk_code for d in result.risk_details] == [
            "TRAVEL_MEDICAL",
            "SPORT_ACTIVITIES",
            "ACCIDENT_COVERAGE",
        ]

    def test_payout_limit_applied(self, repository_factory, make_request):
        repository = repository_factory(
            coverage_levels=[
                CoverageLevel(
                    code="10000",
                    coverage_amount=Decimal("10000"),
                    daily_rate=Decimal("2.00"),
                    max_payout_amount=Decimal("8000"),
                    valid_from=START,
                )
            ]
        )

        result = PremiumCalculationService(repository, Settings()).calculate(make_request())

        assert result.payout_limit is not None
        assert result.payout_limit.was_applied
        assert result.premium_before_discount == Decimal("22.40")
        assert result.final_premium == Decimal("22.40")

    def test_idempotent(self, seeded_repository, make_request):
        service = PremiumCalculationService(seeded_repository, Settings())
        request = make_request(selected_risks=["SPORT_ACTIVITIES", "LUGGAGE_LOSS"])

        assert service.calculate(request) == service.calculate(request)


    def test_reuses_validation_context(self, unit_repository, make_request):
        """Test the country and age resolved by validation are priced as given."""
        context = ValidationContext(
            as_of=date(2025, 6, 1), person_age=40, country=_spain("2.0")
        )

        result = PremiumCalculationService(unit_repository, Settings()).calculate(
            make_request(), context
        )

        assert result.age == 40
        assert result.country_coefficient == Decimal("2.0")
        assert result.final_premium == Decimal("56.00")


class TestCountryDefaultStrategy:
    """Country default day premium × coefficients × nights."""

    def test_unit_coefficients(self, unit_repository, make_request):
        request = make_request(
            use_country_default_premium=True, medical_risk_limit_level=None
        )

        result = PremiumCalculationService(unit_repository, Settings()).calculate(request)

        assert result.calculation_mode == CalculationMode.COUNTRY_DEFAULT
        assert result.base_rate == Decimal("2.50")
        assert result.final_premium == Decimal("35.00")
        assert result.coverage_amount is None
        assert result.payout_limit is None

    @pytest.mark.parametrize("coefficient", ["1.0", "2.5"])
    def test_country_coefficient_not_applied(
        self, repository_factory, make_request, coefficient
    ):
        """Test the default rate already carries the country risk."""
        repository = repository_factory(countries=[_spain(coefficient)])
        request = make_request(use_country_default_premium=True)

        result = PremiumCalculationService(repository, Settings()).calculate(request)

        assert result.final_premium == Decimal("35.00")
        assert result.country_coefficient == Decimal(coefficient)

    def test_seeded_tariff(self, seeded_repository, make_request):
        """Test 2.50 × 1.1 × 0.95 × 14."""
        request = make_request(use_country_default_premium=True)

        result = PremiumCalculationService(seeded_repository, Settings()).calculate(request)

        assert result.final_premium == Decimal("36.58")


class TestModeSelection:
    """Strategy resolution."""

    def test_flag_off(self, unit_repository, make_request):
        assert (
            select_calculation_mode(make_request(), unit_repository, date(2025, 7, 1))
            == CalculationMode.COVERAGE_LEVEL
        )

    def test_flag_on_with_rate(self, unit_repository, make_request):
        request = make_request(use_country_default_premium=True)

        assert (
            select_calculation_mode(request, unit_repository, date(2025, 7, 1))
            == CalculationMode.COUNTRY_DEFAULT
        )

    def test_falls_back_without_rate(self, unit_repository, make_request):
        """Test a country with no default rate is priced by coverage level."""
        request = make_request(country_iso_code="AF", use_country_default_premium=True)

        result = PremiumCalculationService(unit_repository, Settings()).calculate(request)

        assert result.calculation_mode == CalculationMode.COVERAGE_LEVEL
        assert result.country_coefficient == Decimal("3.0")
        assert result.final_premium == Decimal("84.00")

    def test_fallback_without_level_raises(self, unit_repository, make_request):
        request = make_request(
            country_iso_code="AF",
            use_country_default_premium=True,
            medical_risk_limit_level=None,
        )

        with pytest.raises(ConfigurationError, match="no default rate"):
            PremiumCalculationService(unit_repository, Settings()).calculate(request)

    def test_calculate_with_explicit_mode(self, unit_repository, make_request):
        result = PremiumCalculationService(unit_repository, Settings()).calculate_with(
            CalculationMode.COUNTRY_DEFAULT, make_request()
        )

        assert result.final_premium == Decimal("35.00")
