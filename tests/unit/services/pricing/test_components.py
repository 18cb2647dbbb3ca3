"""Tests for the shared calculation components."""

from datetime import date
from decimal import Decimal

import pytest

from travel_insurance.core.config import Settings
from travel_insurance.core.exceptions import ConfigurationError, ReferenceDataNotFoundError
from travel_insurance.models.premium import AdditionalRisksResult, ModifiedRisk
from travel_insurance.models.reference import (
    AgeCoefficient,
    CalculationConfig,
    DurationCoefficient,
)
from travel_insurance.services.pricing.components import SharedCalculationComponents

AS_OF = date(2025, 7, 1)
START = date(2020, 1, 1)


@pytest.fixture
def seeded_components(seeded_repository):
    return SharedCalculationComponents(seeded_repository, Settings())


class TestAgeCalculation:
    """Age and age coefficient."""

    def test_seeded_band(self, seeded_components):
        result = seeded_components.calculate_age(date(1990, 5, 15), AS_OF)

        assert result.age == 35
        assert result.coefficient == Decimal("1.1")
        assert result.description == "Adults"

    def test_request_override_disables(self, seeded_components):
        result = seeded_components.calculate_age(date(1990, 5, 15), AS_OF, False)

        assert result.coefficient == Decimal("1")
        assert result.age == 35

    def test_reference_config_disables(self, repository_factory):
        repository = repository_factory(
            calculation_configs=[
                CalculationConfig(
                    key="AGE_COEFFICIENT_ENABLED", value="false", valid_from=START
                )
            ],
            age_coefficients=[
                AgeCoefficient(
                    age_from=0,
                    age_to=80,
                    coefficient=Decimal("1.5"),
                    description="All",
                    valid_from=START,
                )
            ],
        )
        components = SharedCalculationComponents(repository, Settings())

        assert components.calculate_age(date(1990, 5, 15), AS_OF).coefficient == Decimal("1")
        assert components.calculate_age(
            date(1990, 5, 15), AS_OF, True
        ).coefficient == Decimal("1.5")

    def test_settings_used_without_config(self, repository_factory):
        components = SharedCalculationComponents(
            repository_factory(calculation_configs=[]),
            Settings(age_coefficient_enabled=False),
        )

        assert not components.is_age_coefficient_enabled(AS_OF)

    def test_missing_band_is_configuration_error(self, repository_factory):
        repository = repository_factory(
            age_coefficients=[
                AgeCoefficient(
                    age_from=0,
                    age_to=50,
                    coefficient=Decimal("1.0"),
                    description="Young",
                    valid_from=START,
                )
            ]
        )
        components = SharedCalculationComponents(repository, Settings())

        with pytest.raises(ConfigurationError, match="age 60"):
            components.calculate_age(date(1965, 1, 1), AS_OF)


class TestDurationCoefficient:
    """Duration bands."""

    @pytest.mark.parametrize(
        "days,expected",
        [(1, "1.00"), (7, "1.00"), (8, "0.95"), (14, "0.95"), (30, "0.90"), (365, "0.82")],
    )
    def test_seeded_bands(self, seeded_components, days, expected):
        assert seeded_components.get_duration_coefficient(days, AS_OF) == Decimal(expected)

    def test_unmatched_days_use_one(self, seeded_components):
        assert seeded_components.get_duration_coefficient(400, AS_OF) == Decimal("1")

    def test_overlap_prefers_higher_lower_bound(self, repository_factory):
        repository = repository_factory(
            duration_coefficients=[
                DurationCoefficient(
                    days_from=1, days_to=30, coefficient=Decimal("1.0"), valid_from=START
                ),
                DurationCoefficient(
                    days_from=10, days_to=20, coefficient=Decimal("0.9"), valid_from=START
                ),
            ]
        )
        components = SharedCalculationComponents(repository, Settings())

        assert components.get_duration_coefficient(15, AS_OF) == Decimal("0.9")


class TestAdditionalRisks:
    """Optional risk coefficients."""

    def test_age_modifier_applied(self, seeded_components):
        result = seeded_components.calculate_additional_risks(["EXTREME_SPORT"], 40, AS_OF)

        assert result.total_coefficient == Decimal("0.7800")
        assert result.risks[0].age_modifier == Decimal("1.30")

    def test_no_modifier_uses_one(self, seeded_components):
        result = seeded_components.calculate_additional_risks(["LUGGAGE_LOSS"], 40, AS_OF)

        assert result.total_coefficient == Decimal("0.10")
        assert result.risks[0].age_modifier == Decimal("1")

    def test_sum_of_risks(self, seeded_components):
        result = seeded_components.calculate_additional_risks(
            ["SPORT_ACTIVITIES", "LUGGAGE_LOSS"], 30, AS_OF
        )

        assert result.total_coefficient == Decimal("0.40")

    def test_mandatory_and_blank_skipped(self, seeded_components):
        result = seeded_components.calculate_additional_risks(
            ["TRAVEL_MEDICAL", ""], 30, AS_OF
        )

        assert result.total_coefficient == Decimal("0")
        assert result.risks == []

    def test_unknown_risk_raises(self, seeded_components):
        with pytest.raises(ReferenceDataNotFoundError, match="SPACE_TRAVEL"):
            seeded_components.calculate_additional_risks(["SPACE_TRAVEL"], 30, AS_OF)


class TestBundleDiscount:
    """Bundle selection."""

    def test_no_bundle(self, seeded_components):
        result = seeded_components.calculate_bundle_discount(
            ["SPORT_ACTIVITIES"], Decimal("100.00"), AS_OF
        )

        assert result.bundle is None
        assert result.discount_amount == Decimal("0.00")

    def test_largest_bundle_wins(self, seeded_components):
        """Test the 18% bundle beats the 15% one when both qualify."""
        result = seeded_components.calculate_bundle_discount(
            ["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE", "EXTREME_SPORT", "CHRONIC_DISEASES"],
            Decimal("100.00"),
            AS_OF,
        )

        assert result.bundle is not None
        assert result.bundle.code == "EXTREME_ADVENTURE"
        assert result.discount_amount == Decimal("18.00")


class TestRiskDetails:
    """Per-risk breakdown."""

    def test_medical_row_first(self, seeded_components):
        risks = AdditionalRisksResult(
            total_coefficient=Decimal("0.10"),
            risks=[
                ModifiedRisk(
                    code="LUGGAGE_LOSS",
                    name="Luggage Loss",
                    base_coefficient=Decimal("0.10"),
                    age_modifier=Decimal("1"),
                    modified_coefficient=Decimal("0.10"),
                )
            ],
        )

        details = seeded_components.build_risk_details(Decimal("29.26"), risks, AS_OF)

        assert [d.risk_code for d in details] == ["TRAVEL_MEDICAL", "LUGGAGE_LOSS"]
        assert details[0].premium == Decimal("29.26")
        assert details[1].premium == Decimal("2.93")
