"""Default reference dataset.

Mirrors the production tariff tables so the engine can run without a
database: demo script, tests and local experiments all start from
:func:`build_default_repository`.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ..models.reference import (
    AgeCoefficient,
    AgeRiskModifier,
    CalculationConfig,
    Country,
    CountryDefaultRate,
    CoverageLevel,
    DurationCoefficient,
    PromoCode,
    PromoDiscountType,
    RiskBundle,
    RiskGroup,
    RiskType,
    RuleParameter,
)
from .reference_data import InMemoryReferenceDataRepository

TARIFF_START = date(2020, 1, 1)


@beartype
def default_countries() -> list[Country]:
    rows = [
        ("ES", "Spain", RiskGroup.LOW, "1.0"),
        ("FR", "France", RiskGroup.LOW, "1.0"),
        ("DE", "Germany", RiskGroup.LOW, "1.0"),
        ("IT", "Italy", RiskGroup.LOW, "1.0"),
        ("AT", "Austria", RiskGroup.LOW, "1.0"),
        ("CH", "Switzerland", RiskGroup.LOW, "1.0"),
        ("TR", "Turkey", RiskGroup.MEDIUM, "1.3"),
        ("US", "United States", RiskGroup.MEDIUM, "1.3"),
        ("EG", "Egypt", RiskGroup.HIGH, "1.8"),
        ("IN", "India", RiskGroup.HIGH, "1.8"),
        ("AF", "Afghanistan", RiskGroup.VERY_HIGH, "3.0"),
    ]
    return [
        Country(
            iso_code=code,
            name=name,
            risk_group=group,
            risk_coefficient=Decimal(coefficient),
            valid_from=TARIFF_START,
        )
        for code, name, group, coefficient in rows
    ]


@beartype
def default_coverage_levels() -> list[CoverageLevel]:
    rows = [
        ("5000", "5000.00", "1.50"),
        ("10000", "10000.00", "2.00"),
        ("20000", "20000.00", "3.00"),
        ("50000", "50000.00", "4.50"),
        ("100000", "100000.00", "7.00"),
        ("200000", "200000.00", "12.00"),
        ("500000", "500000.00", "20.00"),
    ]
    return [
        CoverageLevel(
            code=code,
            coverage_amount=Decimal(amount),
            daily_rate=Decimal(rate),
            valid_from=TARIFF_START,
        )
        for code, amount, rate in rows
    ]


@beartype
def default_risk_types() -> list[RiskType]:
    rows = [
        ("TRAVEL_MEDICAL", "Medical Coverage", "0.00", True, "Base medical coverage"),
        ("SPORT_ACTIVITIES", "Sport Activities", "0.30", False, "Skiing, snowboarding, diving"),
        ("EXTREME_SPORT", "Extreme Sport", "0.60", False, "Mountaineering, parachuting"),
        ("PREGNANCY", "Pregnancy Coverage", "0.20", False, "Up to 31 weeks"),
        ("CHRONIC_DISEASES", "Chronic Diseases", "0.40", False, "Diabetes, asthma, etc."),
        ("ACCIDENT_COVERAGE", "Accident Coverage", "0.20", False, "Extended accident coverage"),
        ("TRIP_CANCELLATION", "Trip Cancellation", "0.15", False, "Trip cancellation insurance"),
        ("LUGGAGE_LOSS", "Luggage Loss", "0.10", False, "Lost luggage coverage"),
        ("FLIGHT_DELAY", "Flight Delay", "0.05", False, "Flight delay compensation"),
        ("CIVIL_LIABILITY", "Civil Liability", "0.10", False, "Third party liability"),
    ]
    return [
        RiskType(
            code=code,
            name=name,
            coefficient=Decimal(coefficient),
            is_mandatory=mandatory,
            description=description,
            valid_from=TARIFF_START,
        )
        for code, name, coefficient, mandatory, description in rows
    ]


@beartype
def default_age_coefficients() -> list[AgeCoefficient]:
    rows = [
        (0, 5, "1.1", "Infants and toddlers"),
        (6, 17, "0.9", "Children and teenagers"),
        (18, 30, "1.0", "Young adults"),
        (31, 40, "1.1", "Adults"),
        (41, 50, "1.3", "Middle-aged"),
        (51, 60, "1.6", "Senior"),
        (61, 70, "2.0", "Elderly"),
        (71, 80, "2.5", "Very elderly"),
    ]
    return [
        AgeCoefficient(
            age_from=age_from,
            age_to=age_to,
            coefficient=Decimal(coefficient),
            description=description,
            valid_from=TARIFF_START,
        )
        for age_from, age_to, coefficient, description in rows
    ]


@beartype
def default_age_risk_modifiers() -> list[AgeRiskModifier]:
    rows = [
        ("EXTREME_SPORT", 18, 35, "1.00", "Standard rate for young adults"),
        ("EXTREME_SPORT", 36, 50, "1.30", "+30% for middle-aged"),
        ("EXTREME_SPORT", 51, 65, "1.80", "+80% for seniors"),
        ("EXTREME_SPORT", 66, 80, "2.50", "+150% for elderly"),
        ("SPORT_ACTIVITIES", 18, 50, "1.00", "Standard rate"),
        ("SPORT_ACTIVITIES", 51, 65, "1.20", "+20% for seniors"),
        ("SPORT_ACTIVITIES", 66, 80, "1.50", "+50% for elderly"),
        ("CHRONIC_DISEASES", 18, 45, "1.00", "Standard rate"),
        ("CHRONIC_DISEASES", 46, 60, "1.40", "+40% for middle-aged"),
        ("CHRONIC_DISEASES", 61, 70, "1.80", "+80% for seniors"),
        ("CHRONIC_DISEASES", 71, 80, "2.50", "+150% for elderly"),
    ]
    return [
        AgeRiskModifier(
            risk_code=risk_code,
            age_from=age_from,
            age_to=age_to,
            coefficient_modifier=Decimal(modifier),
            description=description,
            valid_from=TARIFF_START,
        )
        for risk_code, age_from, age_to, modifier, description in rows
    ]


@beartype
def default_duration_coefficients() -> list[DurationCoefficient]:
    rows = [
        (1, 7, "1.00", "Short trip (1 week)"),
        (8, 14, "0.95", "Medium trip (2 weeks)"),
        (15, 30, "0.90", "Long trip (1 month)"),
        (31, 60, "0.88", "Extended trip (2 months)"),
        (61, 90, "0.85", "Very long trip (3 months)"),
        (91, 365, "0.82", "Ultra long trip (3+ months)"),
    ]
    return [
        DurationCoefficient(
            days_from=days_from,
            days_to=days_to,
            coefficient=Decimal(coefficient),
            description=description,
            valid_from=TARIFF_START,
        )
        for days_from, days_to, coefficient, description in rows
    ]


@beartype
def default_risk_bundles() -> list[RiskBundle]:
    return [
        RiskBundle(
            code="ACTIVE_TRAVELER",
            name="Active Traveler Package",
            discount_percentage=Decimal("15.00"),
            required_risks=["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"],
            valid_from=TARIFF_START,
        ),
        RiskBundle(
            code="FULL_PROTECTION",
            name="Full Protection Package",
            discount_percentage=Decimal("20.00"),
            required_risks=["TRIP_CANCELLATION", "LUGGAGE_LOSS", "FLIGHT_DELAY"],
            valid_from=TARIFF_START,
        ),
        RiskBundle(
            code="EXTREME_ADVENTURE",
            name="Extreme Adventure",
            discount_percentage=Decimal("18.00"),
            required_risks=["EXTREME_SPORT", "ACCIDENT_COVERAGE", "CHRONIC_DISEASES"],
            valid_from=TARIFF_START,
        ),
    ]


@beartype
def default_promo_codes() -> list[PromoCode]:
    return [
        PromoCode(
            code="SUMMER2025",
            description="Summer discount 10%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            min_premium_amount=Decimal("50"),
            max_discount_amount=Decimal("100"),
            max_usage_count=1000,
            valid_from=date(2025, 6, 1),
            valid_to=date(2025, 8, 31),
        ),
        PromoCode(
            code="WINTER2025",
            description="Winter discount 15%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("15"),
            min_premium_amount=Decimal("100"),
            max_discount_amount=Decimal("200"),
            max_usage_count=500,
            valid_from=date(2025, 12, 1),
            valid_to=date(2026, 12, 31),
        ),
        PromoCode(
            code="WELCOME50",
            description="Welcome bonus 50 EUR",
            discount_type=PromoDiscountType.FIXED_AMOUNT,
            discount_value=Decimal("50"),
            min_premium_amount=Decimal("200"),
            max_usage_count=100,
            valid_from=date(2025, 1, 1),
            valid_to=date(2026, 12, 31),
        ),
        PromoCode(
            code="FAMILY20",
            description="Family discount 20%",
            discount_type=PromoDiscountType.PERCENTAGE,
            discount_value=Decimal("20"),
            min_premium_amount=Decimal("150"),
            max_discount_amount=Decimal("300"),
            valid_from=date(2025, 1, 1),
            valid_to=date(2026, 12, 31),
        ),
    ]


@beartype
def default_country_default_rates() -> list[CountryDefaultRate]:
    rows = [
        ("ES", "2.50"),
        ("FR", "2.50"),
        ("DE", "2.50"),
        ("IT", "2.50"),
        ("TR", "3.50"),
        ("US", "5.00"),
        ("EG", "4.50"),
    ]
    return [
        CountryDefaultRate(
            country_iso_code=code,
            default_day_premium=Decimal(rate),
            description=f"Default daily premium for {code}",
            valid_from=TARIFF_START,
        )
        for code, rate in rows
    ]


@beartype
def default_rule_parameters() -> list[RuleParameter]:
    rows = [
        ("AgeRule", "MAX_AGE", "80"),
        ("AgeRule", "REVIEW_AGE_THRESHOLD", "75"),
        ("TripDurationRule", "MAX_DAYS", "180"),
        ("TripDurationRule", "REVIEW_DAYS", "90"),
    ]
    return [
        RuleParameter(
            rule_name=rule_name,
            parameter_name=parameter_name,
            value=Decimal(value),
            valid_from=TARIFF_START,
        )
        for rule_name, parameter_name, value in rows
    ]


@beartype
def default_calculation_configs() -> list[CalculationConfig]:
    return [
        CalculationConfig(
            key="AGE_COEFFICIENT_ENABLED",
            value="true",
            description="Apply age coefficients to premium",
            valid_from=TARIFF_START,
        )
    ]


@beartype
def build_default_repository() -> InMemoryReferenceDataRepository:
    """Create a repository loaded with the default tariff tables."""
    return InMemoryReferenceDataRepository(
        countries=default_countries(),
        coverage_levels=default_coverage_levels(),
        risk_types=default_risk_types(),
        age_coefficients=default_age_coefficients(),
        age_risk_modifiers=default_age_risk_modifiers(),
        duration_coefficients=default_duration_coefficients(),
        risk_bundles=default_risk_bundles(),
        promo_codes=default_promo_codes(),
        country_default_rates=default_country_default_rates(),
        rule_parameters=default_rule_parameters(),
        calculation_configs=default_calculation_configs(),
    )
