# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Premium quote response schemas consumed by the HTTP layer."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field

from ..models.discount import AppliedDiscount
from ..models.premium import CalculationStep, PayoutLimitResult, RiskPremiumDetail
from ..models.quote import CalculationMode
from ..models.underwriting import RuleResult, UnderwritingDecision
from ..models.validation import ValidationError

_SCHEMA_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    validate_assignment=True,
    str_strip_whitespace=True,
    validate_default=True,
)


class ResponseStatus(str, Enum):
    """Overall outcome of a quote request."""

    SUCCESS = "SUCCESS"
    REQUIRES_REVIEW = "REQUIRES_REVIEW"
    DECLINED = "DECLINED"
    VALIDATION_FAILED = "VALIDATION_FAILED"


HTTP_STATUS_BY_RESPONSE: dict[ResponseStatus, int] = {
    ResponseStatus.SUCCESS: 200,
    ResponseStatus.REQUIRES_REVIEW: 202,
    ResponseStatus.DECLINED: 422,
    ResponseStatus.VALIDATION_FAILED: 400,
}


@beartype
def status_for_decision(decision: UnderwritingDecision) -> ResponseStatus:
    """Response status of a priced request with the given underwriting decision."""
    if decision == UnderwritingDecision.DECLINED:
        return ResponseStatus.DECLINED
    if decision == UnderwritingDecision.REQUIRES_MANUAL_REVIEW:
        return ResponseStatus.REQUIRES_REVIEW
    return ResponseStatus.SUCCESS


@beartype
class PersonSummary(BaseModel):
    """Traveller details echoed back with derived age."""

    model_config = _SCHEMA_CONFIG

    first_name: str
    last_name: str
    birth_date: date
    age: int
    age_group: str


@beartype
class TripSummary(BaseModel):
    """Trip window, destination and coverage."""

    model_config = _SCHEMA_CONFIG

    date_from: date
    date_to: date
    days: int = Field(..., description="Priced days (end minus start)")
    country_iso_code: str
    country_name: str
    calculation_mode: CalculationMode
    coverage_level: str | None = None
    coverage_amount: Decimal | None = None


@beartype
class PricingSummary(BaseModel):
    """Headline amounts of the quote."""

    model_config = _SCHEMA_CONFIG

    total_premium: Decimal = Field(..., description="Amount payable")
    base_amount: Decimal = Field(
        ..., description="Premium before bundle, promo and group discounts"
    )
    total_discount: Decimal
    currency: str
    included_risks: list[str] = Field(default_factory=list)
    minimum_premium_applied: bool = False


@beartype
class PricingDetails(BaseModel):
    """Full coefficient breakdown behind the premium."""

    model_config = _SCHEMA_CONFIG

    base_rate: Decimal
    age_coefficient: Decimal
    country_coefficient: Decimal
    duration_coefficient: Decimal
    additional_risks_coefficient: Decimal
    total_coefficient: Decimal
    days: int
    formula: str
    calculation_steps: list[CalculationStep] = Field(default_factory=list)
    risk_breakdown: list[RiskPremiumDetail] = Field(default_factory=list)
    payout_limit: PayoutLimitResult | None = None


@beartype
class UnderwritingInfo(BaseModel):
    """Underwriting decision with the rules that produced it."""

    model_config = _SCHEMA_CONFIG

    decision: UnderwritingDecision
    reason: str | None = None
    evaluated_rules: list[RuleResult] = Field(default_factory=list)


@beartype
class PremiumResponse(BaseModel):
    """Premium quote response.

    Validation failures carry only ``errors``; every other status carries the
    full pricing breakdown and the underwriting decision.
    """

    model_config = _SCHEMA_CONFIG

    status: ResponseStatus
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationError] = Field(default_factory=list)
    person: PersonSummary | None = None
    trip: TripSummary | None = None
    pricing: PricingSummary | None = None
    pricing_details: PricingDetails | None = None
    applied_discounts: list[AppliedDiscount] = Field(default_factory=list)
    underwriting: UnderwritingInfo | None = None

    @property
    def http_status(self) -> int:
        """Status code the HTTP layer should answer with."""
        return HTTP_STATUS_BY_RESPONSE[self.status]

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS
