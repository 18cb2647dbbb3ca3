"""Assemble quote responses from the pipeline's intermediate results."""

from collections.abc import Sequence

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.exceptions import ConfigurationError
from ..core.money import round_money
from ..models.discount import AppliedDiscount, DiscountApplicationResult, DiscountType
from ..models.premium import PremiumCalculationResult
from ..models.quote import CalculationMode, PremiumRequest
from ..models.underwriting import UnderwritingResult
from ..models.validation import ValidationError
from ..schemas.premium import (
    PersonSummary,
    PremiumResponse,
    PricingDetails,
    PricingSummary,
    ResponseStatus,
    TripSummary,
    UnderwritingInfo,
    status_for_decision,
)


@beartype
class ResponseAssembler:
    """Build :class:`PremiumResponse` objects."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def validation_failure(self, findings: Sequence[ValidationError]) -> PremiumResponse:
        """Response for a request rejected by validation: findings only."""
        return PremiumResponse(
            status=ResponseStatus.VALIDATION_FAILED,
            errors=[f for f in findings if f.is_blocking],
            warnings=[f for f in findings if not f.is_blocking],
        )

    def quote(
        self,
        request: PremiumRequest,
        calculation: PremiumCalculationResult,
        discounts: DiscountApplicationResult,
        underwriting: UnderwritingResult,
        warnings: Sequence[ValidationError] = (),
    ) -> PremiumResponse:
        """Response for a priced and underwritten request."""
        if (
            request.person_first_name is None
            or request.person_last_name is None
            or request.person_birth_date is None
            or request.agreement_date_from is None
            or request.agreement_date_to is None
            or request.country_iso_code is None
        ):
            raise ConfigurationError("Cannot assemble a quote for an incomplete request")

        applied = self._applied_discounts(calculation, discounts)
        total_discount = round_money(
            calculation.bundle_discount.discount_amount + discounts.total_discount
        )

        return PremiumResponse(
            status=status_for_decision(underwriting.decision),
            warnings=list(warnings),
            person=PersonSummary(
                first_name=request.person_first_name,
                last_name=request.person_last_name,
                birth_date=request.person_birth_date,
                age=calculation.age,
                age_group=calculation.age_group_description,
            ),
            trip=TripSummary(
                date_from=request.agreement_date_from,
                date_to=request.agreement_date_to,
                days=calculation.days,
                country_iso_code=request.country_iso_code.upper(),
                country_name=calculation.country_name,
                calculation_mode=calculation.calculation_mode,
                coverage_level=(
                    request.medical_risk_limit_level
                    if calculation.calculation_mode == CalculationMode.COVERAGE_LEVEL
                    else None
                ),
                coverage_amount=calculation.coverage_amount,
            ),
            pricing=PricingSummary(
                total_premium=discounts.final_premium,
                base_amount=calculation.premium_before_discount,
                total_discount=total_discount,
                currency=self._currency(request),
                included_risks=[d.risk_code for d in calculation.risk_details],
                minimum_premium_applied=discounts.minimum_premium_applied,
            ),
            pricing_details=PricingDetails(
                base_rate=calculation.base_rate,
                age_coefficient=calculation.age_coefficient,
                country_coefficient=calculation.country_coefficient,
                duration_coefficient=calculation.duration_coefficient,
                additional_risks_coefficient=calculation.additional_risks_coefficient,
                total_coefficient=calculation.total_coefficient,
                days=calculation.days,
                formula=calculation.formula,
                calculation_steps=calculation.calculation_steps,
                risk_breakdown=calculation.risk_details,
                payout_limit=calculation.payout_limit,
            ),
            applied_discounts=applied,
            underwriting=UnderwritingInfo(
                decision=underwriting.decision,
                reason=underwriting.reason,
                evaluated_rules=underwriting.rule_results,
            ),
        )

    def _currency(self, request: PremiumRequest) -> str:
        if request.currency and request.currency.strip():
            return request.currency.upper()
        return self._settings.default_currency

    @staticmethod
    def _applied_discounts(
        calculation: PremiumCalculationResult, discounts: DiscountApplicationResult
    ) -> list[AppliedDiscount]:
        applied: list[AppliedDiscount] = []
        bundle = calculation.bundle_discount.bundle
        if bundle is not None:
            applied.append(
                AppliedDiscount(
                    discount_type=DiscountType.BUNDLE,
                    code=bundle.code,
                    description=bundle.name,
                    amount=bundle.discount_amount,
                    percentage=bundle.discount_percentage,
                )
            )
        applied.extend(discounts.applied_discounts)
        return applied
