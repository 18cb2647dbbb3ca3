"""Domain models package for the premium determination engine.

This package exports all Pydantic domain models with strict validation
and immutability.
"""

from .base import BaseModelConfig, EffectiveDatedModel
from .discount import (
    AppliedDiscount,
    DiscountApplicationResult,
    DiscountType,
    GroupDiscountTier,
)
from .premium import (
    AdditionalRisksResult,
    AgeCalculationResult,
    AppliedBundle,
    BundleDiscountResult,
    CalculationStep,
    ModifiedRisk,
    PayoutLimitResult,
    PremiumCalculationResult,
    RiskPremiumDetail,
)
from .quote import CalculationMode, PremiumRequest
from .reference import (
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
from .underwriting import (
    RuleResult,
    RuleSeverity,
    UnderwritingDecision,
    UnderwritingFacts,
    UnderwritingResult,
)
from .validation import ValidationError, ValidationSeverity

__all__ = [
    # Base models
    "BaseModelConfig",
    "EffectiveDatedModel",
    # Request
    "PremiumRequest",
    "CalculationMode",
    # Reference data
    "Country",
    "RiskGroup",
    "CoverageLevel",
    "RiskType",
    "AgeCoefficient",
    "AgeRiskModifier",
    "DurationCoefficient",
    "RiskBundle",
    "PromoCode",
    "PromoDiscountType",
    "CountryDefaultRate",
    "RuleParameter",
    "CalculationConfig",
    # Premium
    "AgeCalculationResult",
    "ModifiedRisk",
    "AdditionalRisksResult",
    "AppliedBundle",
    "BundleDiscountResult",
    "PayoutLimitResult",
    "RiskPremiumDetail",
    "CalculationStep",
    "PremiumCalculationResult",
    # Discounts
    "DiscountType",
    "GroupDiscountTier",
    "AppliedDiscount",
    "DiscountApplicationResult",
    # Underwriting
    "RuleSeverity",
    "RuleResult",
    "UnderwritingDecision",
    "UnderwritingFacts",
    "UnderwritingResult",
    # Validation
    "ValidationError",
    "ValidationSeverity",
]
