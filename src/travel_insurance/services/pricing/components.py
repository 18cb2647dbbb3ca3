# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Calculation components shared by both premium strategies.

Covers age and its coefficient, the trip-duration coefficient, the
age-adjusted sum of optional risk coefficients, bundle discounts and the
per-risk premium breakdown.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.dates import full_years_between
from ...core.exceptions import ConfigurationError, ReferenceDataNotFoundError
from ...core.logging_utils import get_logger
from ...core.money import ONE, ZERO, percentage_of, round_money
from ...models.premium import (
    AdditionalRisksResult,
    AgeCalculationResult,
    AppliedBundle,
    BundleDiscountResult,
    ModifiedRisk,
    RiskPremiumDetail,
)
from ...models.reference import AgeCoefficient
from ..reference_data import ReferenceDataRepository

logger = get_logger(__name__)

AGE_COEFFICIENT_CONFIG_KEY = "AGE_COEFFICIENT_ENABLED"
BASE_MEDICAL_RISK = "TRAVEL_MEDICAL"


@beartype
class SharedCalculationComponents:
    """Reference-data driven building blocks of the premium formula."""

    def __init__(
        self,
        repository: ReferenceDataRepository,
        settings: Settings | None = None,
    ) -> None:
        """Initialize with the reference data port and engine settings."""
        self._repository = repository
        self._settings = settings or get_settings()

    # Age

    def calculate_age(
        self,
        birth_date: date,
        as_of_date: date,
        age_coefficient_enabled: bool | None = None,
        *,
        known_age: int | None = None,
    ) -> AgeCalculationResult:
        """Compute age at ``as_of_date`` and its coefficient.

        Args:
            birth_date: Traveller birth date
            as_of_date: Trip start date
            age_coefficient_enabled: Request override; ``None`` defers to
                reference configuration, then to settings
            known_age: Age already derived during validation; computed from
                the dates when absent

        Raises:
            ConfigurationError: The age coefficient is enabled and no age
                band covers the computed age
        """
        age = (
            known_age
            if known_age is not None
            else full_years_between(birth_date, as_of_date)
        )
        enabled = self.is_age_coefficient_enabled(as_of_date, age_coefficient_enabled)
        band = self._find_age_band(age, as_of_date)

        if not enabled:
            description = band.description if band is not None else "Age not banded"
            logger.debug("Age coefficient disabled; age=%d uses 1.0", age)
            return AgeCalculationResult(
                age=age, coefficient=ONE, description=description
            )

        if band is None:
            raise ConfigurationError(
                f"No age coefficient band covers age {age} on {as_of_date.isoformat()}"
            )
        return AgeCalculationResult(
            age=age, coefficient=band.coefficient, description=band.description
        )

    def is_age_coefficient_enabled(
        self, as_of_date: date, override: bool | None = None
    ) -> bool:
        """Resolve the age coefficient switch: request, reference config, settings."""
        if override is not None:
            return override
        config = self._repository.find_calculation_config(
            AGE_COEFFICIENT_CONFIG_KEY, as_of_date
        )
        if config is not None:
            return config.as_bool()
        return self._settings.age_coefficient_enabled

    def _find_age_band(self, age: int, as_of_date: date) -> AgeCoefficient | None:
        matches = [
            band
            for band in self._repository.list_age_coefficients(as_of_date)
            if band.contains(age)
        ]
        if not matches:
            return None
        return max(matches, key=lambda band: band.age_from)

    # Duration

    def get_duration_coefficient(self, days: int, as_of_date: date) -> Decimal:
        """Coefficient of the band containing ``days`` with the highest lower bound.

        ``days`` counts nights (end minus start). Falls back to 1.0 when no
        band matches.
        """
        matches = [
            band
            for band in self._repository.list_duration_coefficients(as_of_date)
            if band.contains(days)
        ]
        if not matches:
            logger.warning(
                "No duration coefficient for %d days on %s, using 1.0",
                days,
                as_of_date.isoformat(),
            )
            return ONE
        return max(matches, key=lambda band: band.days_from).coefficient

    # Additional risks

    def calculate_additional_risks(
        self, selected_risk_codes: Sequence[str], age: int, as_of_date: date
    ) -> AdditionalRisksResult:
        """Sum optional risk coefficients after age modifiers.

        Blank and mandatory codes contribute nothing.

        Raises:
            ReferenceDataNotFoundError: A selected code has no active record
        """
        risks: list[ModifiedRisk] = []
        total = ZERO
        for code in dict.fromkeys(c for c in selected_risk_codes if c and c.strip()):
            risk = self._repository.find_risk_type(code, as_of_date)
            if risk is None:
                raise ReferenceDataNotFoundError("Risk type", code, as_of_date)
            if risk.is_mandatory:
                continue
            modifier = self._repository.find_age_risk_modifier(code, age, as_of_date)
            age_modifier = modifier.coefficient_modifier if modifier else ONE
            modified = risk.coefficient * age_modifier
            risks.append(
                ModifiedRisk(
                    code=risk.code,
                    name=risk.name,
                    base_coefficient=risk.coefficient,
                    age_modifier=age_modifier,
                    modified_coefficient=modified,
                )
            )
            total += modified
        return AdditionalRisksResult(total_coefficient=total, risks=risks)

    # Bundles

    def calculate_bundle_discount(
        self,
        selected_risk_codes: Sequence[str],
        premium_before_discount: Decimal,
        as_of_date: date,
    ) -> BundleDiscountResult:
        """Find the qualifying bundle with the largest discount."""
        selected = {code for code in selected_risk_codes if code and code.strip()}
        best: AppliedBundle | None = None
        for bundle in self._repository.list_risk_bundles(as_of_date):
            if not bundle.is_satisfied_by(selected):
                continue
            amount = percentage_of(premium_before_discount, bundle.discount_percentage)
            if best is None or amount > best.discount_amount:
                best = AppliedBundle(
                    code=bundle.code,
                    name=bundle.name,
                    discount_percentage=bundle.discount_percentage,
                    discount_amount=amount,
                )
        if best is None:
            return BundleDiscountResult()
        logger.debug("Bundle %s applies: -%s", best.code, best.discount_amount)
        return BundleDiscountResult(bundle=best, discount_amount=best.discount_amount)

    # Breakdown

    def build_risk_details(
        self,
        base_premium: Decimal,
        additional_risks: AdditionalRisksResult,
        as_of_date: date,
    ) -> list[RiskPremiumDetail]:
        """Attribute premium to the base medical cover and each optional risk.

        Args:
            base_premium: Premium of the mandatory cover alone
            additional_risks: Age-modified optional risks
            as_of_date: Trip start date
        """
        medical = self._repository.find_risk_type(BASE_MEDICAL_RISK, as_of_date)
        if medical is None:
            raise ReferenceDataNotFoundError("Risk type", BASE_MEDICAL_RISK, as_of_date)

        details = [
            RiskPremiumDetail(
                risk_code=medical.code,
                risk_name=medical.name,
                premium=round_money(base_premium),
                coefficient=ZERO,
            )
        ]
        for risk in additional_risks.risks:
            details.append(
                RiskPremiumDetail(
                    risk_code=risk.code,
                    risk_name=risk.name,
                    premium=round_money(base_premium * risk.modified_coefficient),
                    coefficient=risk.modified_coefficient,
                    age_modifier=risk.age_modifier,
                )
            )
        return details
