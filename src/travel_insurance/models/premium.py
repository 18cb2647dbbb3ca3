"""Premium calculation result models."""

from decimal import Decimal

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig
from .quote import CalculationMode


@beartype
class AgeCalculationResult(BaseModelConfig):
    """Traveller age at trip start with its coefficient."""

    age: int = Field(..., description="Whole years at trip start")
    coefficient: Decimal = Field(..., gt=Decimal("0"))
    description: str = Field(..., description="Age group label")


@beartype
class ModifiedRisk(BaseModelConfig):
    """One optional risk after its age modifier is applied."""

    code: str
    name: str
    base_coefficient: Decimal
    age_modifier: Decimal
    modified_coefficient: Decimal


@beartype
class AdditionalRisksResult(BaseModelConfig):
    """Sum of modified optional risk coefficients."""

    total_coefficient: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    risks: list[ModifiedRisk] = Field(default_factory=list)


@beartype
class AppliedBundle(BaseModelConfig):
    """Bundle discount granted for a qualifying risk selection."""

    code: str
    name: str
    discount_percentage: Decimal
    discount_amount: Decimal


@beartype
class BundleDiscountResult(BaseModelConfig):
    """Best qualifying bundle, if any."""

    bundle: AppliedBundle | None = None
    discount_amount: Decimal = Field(default=Decimal("0.00"), ge=Decimal("0"))


@beartype
class PayoutLimitResult(BaseModelConfig):
    """Outcome of the payout-limit correction."""

    adjusted_premium: Decimal
    applied_limit: Decimal | None = None
    was_applied: bool = False


@beartype
class RiskPremiumDetail(BaseModelConfig):
    """Premium attributed to one risk in the breakdown."""

    risk_code: str
    risk_name: str
    premium: Decimal
    coefficient: Decimal
    age_modifier: Decimal | None = None


@beartype
class CalculationStep(BaseModelConfig):
    """Human-readable step of the premium arithmetic."""

    description: str
    formula: str
    result: Decimal


@beartype
class PremiumCalculationResult(BaseModelConfig):
    """Full pricing breakdown produced once per request by a strategy."""

    calculation_mode: CalculationMode
    base_rate: Decimal = Field(..., description="Daily rate or country default rate")
    age: int
    age_coefficient: Decimal
    age_group_description: str
    country_coefficient: Decimal = Field(
        ..., description="Destination coefficient, reported even when not applied"
    )
    country_name: str
    duration_coefficient: Decimal
    additional_risks_coefficient: Decimal
    total_coefficient: Decimal
    days: int = Field(..., ge=0, description="Trip length as end minus start")
    coverage_amount: Decimal | None = Field(
        None, description="Insured amount; None in country-default mode"
    )
    premium_before_discount: Decimal = Field(
        ..., description="Premium after payout-limit correction, before bundle discount"
    )
    risk_details: list[RiskPremiumDetail] = Field(default_factory=list)
    bundle_discount: BundleDiscountResult = Field(default_factory=BundleDiscountResult)
    payout_limit: PayoutLimitResult | None = None
    final_premium: Decimal
    calculation_steps: list[CalculationStep] = Field(default_factory=list)
    formula: str = ""
