"""Shared fixtures for the premium determination engine tests.

Two repositories are available: ``unit_repository`` holds minimal reference
data whose coefficients are all 1.0, so expected premiums can be worked out
by hand; ``seeded_repository`` holds the default tariff tables.
"""

import os
from collections.abc import Callable, Iterator
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from travel_insurance.core.config import Settings, clear_settings_cache
from travel_insurance.models.quote import PremiumRequest
from travel_insurance.models.reference import (
    AgeCoefficient,
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
)
from travel_insurance.services.reference_data import InMemoryReferenceDataRepository
from travel_insurance.services.reference_seed import build_default_repository

TODAY = date(2025, 6, 1)
TARIFF_START = date(2020, 1, 1)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep environment overrides and cached settings out of other tests."""
    for name in list(os.environ):
        if name.startswith("PREMIUM_ENGINE_"):
            monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def today() -> date:
    """Fixed "today" used by validation clocks."""
    return TODAY


@pytest.fixture
def clock() -> Callable[[], date]:
    return lambda: TODAY


@pytest.fixture
def settings() -> Settings:
    return Settings()


def build_unit_repository(**overrides: Any) -> InMemoryReferenceDataRepository:
    """Repository with unit coefficients; keyword arguments replace a table."""
    tables: dict[str, Any] = {
        "countries": [
            Country(
                iso_code="ES",
                name="Spain",
                risk_group=RiskGroup.LOW,
                risk_coefficient=Decimal("1.0"),
                valid_from=TARIFF_START,
            ),
            Country(
                iso_code="AF",
                name="Afghanistan",
                risk_group=RiskGroup.VERY_HIGH,
                risk_coefficient=Decimal("3.0"),
                valid_from=TARIFF_START,
            ),
        ],
        "coverage_levels": [
            CoverageLevel(
                code="10000",
                coverage_amount=Decimal("10000"),
                daily_rate=Decimal("2.00"),
                valid_from=TARIFF_START,
            ),
        ],
        "risk_types": [
            RiskType(
                code="TRAVEL_MEDICAL",
                name="Medical Coverage",
                coefficient=Decimal("0"),
                is_mandatory=True,
                valid_from=TARIFF_START,
            ),
            RiskType(
                code="SPORT_ACTIVITIES",
                name="Sport Activities",
                coefficient=Decimal("0.30"),
                valid_from=TARIFF_START,
            ),
            RiskType(
                code="ACCIDENT_COVERAGE",
                name="Accident Coverage",
                coefficient=Decimal("0.20"),
                valid_from=TARIFF_START,
            ),
            RiskType(
                code="EXTREME_SPORT",
                name="Extreme Sport",
                coefficient=Decimal("0.60"),
                valid_from=TARIFF_START,
            ),
        ],
        "age_coefficients": [
            AgeCoefficient(
                age_from=0,
                age_to=80,
                coefficient=Decimal("1.0"),
                description="All ages",
                valid_from=TARIFF_START,
            ),
        ],
        "duration_coefficients": [
            DurationCoefficient(
                days_from=0,
                days_to=365,
                coefficient=Decimal("1.0"),
                valid_from=TARIFF_START,
            ),
        ],
        "risk_bundles": [
            RiskBundle(
                code="ACTIVE_TRAVELER",
                name="Active Traveler Package",
                discount_percentage=Decimal("15"),
                required_risks=["SPORT_ACTIVITIES", "ACCIDENT_COVERAGE"],
                valid_from=TARIFF_START,
            ),
        ],
        "promo_codes": [
            PromoCode(
                code="SAVE10",
                description="Ten percent off",
                discount_type=PromoDiscountType.PERCENTAGE,
                discount_value=Decimal("10"),
                max_usage_count=5,
                valid_from=TARIFF_START,
            ),
        ],
        "country_default_rates": [
            CountryDefaultRate(
                country_iso_code="ES",
                default_day_premium=Decimal("2.50"),
                valid_from=TARIFF_START,
            ),
        ],
        "calculation_configs": [
            CalculationConfig(
                key="AGE_COEFFICIENT_ENABLED", value="true", valid_from=TARIFF_START
            ),
        ],
    }
    tables.update(overrides)
    return InMemoryReferenceDataRepository(**tables)


@pytest.fixture
def unit_repository() -> InMemoryReferenceDataRepository:
    return build_unit_repository()


@pytest.fixture
def seeded_repository() -> InMemoryReferenceDataRepository:
    return build_default_repository()


@pytest.fixture
def make_request() -> Callable[..., PremiumRequest]:
    """Factory for a valid 14-night trip to Spain; keyword arguments override fields."""

    def _make(**overrides: Any) -> PremiumRequest:
        data: dict[str, Any] = {
            "person_first_name": "Anna",
            "person_last_name": "Berzina",
            "person_birth_date": date(1990, 5, 15),
            "agreement_date_from": date(2025, 7, 1),
            "agreement_date_to": date(2025, 7, 15),
            "country_iso_code": "ES",
            "medical_risk_limit_level": "10000",
        }
        data.update(overrides)
        return PremiumRequest(**data)

    return _make


@pytest.fixture
def repository_factory() -> Callable[..., InMemoryReferenceDataRepository]:
    """Build a unit-coefficient repository with some tables replaced."""
    return build_unit_repository
