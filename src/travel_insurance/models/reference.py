"""Effective-dated reference data consumed by the engine."""

from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field, field_validator, model_validator

from .base import EffectiveDatedModel


class RiskGroup(str, Enum):
    """Destination risk classification."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class PromoDiscountType(str, Enum):
    """How a promo code value is interpreted."""

    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


@beartype
class Country(EffectiveDatedModel):
    """Destination country with its risk group and coefficient."""

    iso_code: str = Field(..., min_length=2, max_length=2, description="ISO 3166 alpha-2")
    name: str = Field(..., min_length=1, max_length=100)
    risk_group: RiskGroup
    risk_coefficient: Decimal = Field(..., gt=Decimal("0"))

    @field_validator("iso_code")
    @classmethod
    def validate_iso_code(cls, v: str) -> str:
        """Store ISO codes upper-case."""
        return v.upper()


@beartype
class CoverageLevel(EffectiveDatedModel):
    """Medical coverage tier: insured amount and the daily rate it costs."""

    code: str = Field(..., min_length=1, max_length=50)
    coverage_amount: Decimal = Field(..., gt=Decimal("0"))
    daily_rate: Decimal = Field(..., gt=Decimal("0"))
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    max_payout_amount: Decimal | None = Field(
        None, gt=Decimal("0"), description="Insurer liability cap, if lower than coverage"
    )


@beartype
class RiskType(EffectiveDatedModel):
    """Insurable risk, either the mandatory base cover or an optional add-on."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    coefficient: Decimal = Field(..., ge=Decimal("0"))
    is_mandatory: bool = False
    description: str | None = None


@beartype
class AgeCoefficient(EffectiveDatedModel):
    """Global age band multiplier."""

    age_from: int = Field(..., ge=0)
    age_to: int = Field(..., ge=0)
    coefficient: Decimal = Field(..., gt=Decimal("0"))
    description: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_band(self) -> "AgeCoefficient":
        if self.age_to < self.age_from:
            raise ValueError("age_to must not be below age_from")
        return self

    def contains(self, age: int) -> bool:
        return self.age_from <= age <= self.age_to


@beartype
class AgeRiskModifier(EffectiveDatedModel):
    """Age band multiplier applied to one optional risk's coefficient."""

    risk_code: str = Field(..., min_length=1)
    age_from: int = Field(..., ge=0)
    age_to: int = Field(..., ge=0)
    coefficient_modifier: Decimal = Field(..., gt=Decimal("0"))
    description: str | None = None

    def contains(self, age: int) -> bool:
        return self.age_from <= age <= self.age_to


@beartype
class DurationCoefficient(EffectiveDatedModel):
    """Trip length band multiplier."""

    days_from: int = Field(..., ge=0)
    days_to: int = Field(..., ge=0)
    coefficient: Decimal = Field(..., gt=Decimal("0"))
    description: str | None = None

    @model_validator(mode="after")
    def validate_band(self) -> "DurationCoefficient":
        if self.days_to < self.days_from:
            raise ValueError("days_to must not be below days_from")
        return self

    def contains(self, days: int) -> bool:
        return self.days_from <= days <= self.days_to


@beartype
class RiskBundle(EffectiveDatedModel):
    """Package discount granted when every required risk is selected.

    ``discount_percentage`` is expressed in percentage points (``10`` means
    ten percent).
    """

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    discount_percentage: Decimal = Field(..., ge=Decimal("0"), le=Decimal("100"))
    required_risks: list[str] = Field(..., min_length=1)

    def is_satisfied_by(self, selected_codes: set[str]) -> bool:
        return all(code in selected_codes for code in self.required_risks)


@beartype
class PromoCode(EffectiveDatedModel):
    """Promotional code with its validity window and usage cap.

    ``current_usage_count`` is a snapshot; the authoritative counter lives in
    the repository and only changes through its atomic redemption.
    """

    code: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    discount_type: PromoDiscountType
    discount_value: Decimal = Field(..., gt=Decimal("0"))
    min_premium_amount: Decimal | None = Field(None, ge=Decimal("0"))
    max_discount_amount: Decimal | None = Field(None, gt=Decimal("0"))
    max_usage_count: int | None = Field(None, ge=0, description="None means unlimited")
    current_usage_count: int = Field(default=0, ge=0)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def validate_percentage(self) -> "PromoCode":
        """Percentage codes cannot exceed 100 percent."""
        if (
            self.discount_type == PromoDiscountType.PERCENTAGE
            and self.discount_value > Decimal("100")
        ):
            raise ValueError("Percentage discount cannot exceed 100")
        return self

    @property
    def usage_exhausted(self) -> bool:
        return (
            self.max_usage_count is not None
            and self.current_usage_count >= self.max_usage_count
        )


@beartype
class CountryDefaultRate(EffectiveDatedModel):
    """Flat daily premium for a destination, country risk already folded in."""

    country_iso_code: str = Field(..., min_length=2, max_length=2)
    default_day_premium: Decimal = Field(..., gt=Decimal("0"))
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    description: str | None = None


@beartype
class RuleParameter(EffectiveDatedModel):
    """Tunable underwriting threshold keyed by rule and parameter name."""

    rule_name: str = Field(..., min_length=1)
    parameter_name: str = Field(..., min_length=1)
    value: Decimal
    description: str | None = None


@beartype
class CalculationConfig(EffectiveDatedModel):
    """Global calculation switch stored as reference data."""

    key: str = Field(..., min_length=1)
    value: str
    description: str | None = None

    def as_bool(self) -> bool:
        return self.value.strip().lower() in {"true", "1", "yes", "on"}
