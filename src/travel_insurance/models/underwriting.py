"""Underwriting rule results and decisions."""

from datetime import date
from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig
from .reference import Country


class RuleSeverity(str, Enum):
    """Outcome of a single underwriting rule, mildest first."""

    PASS = "PASS"
    WARNING = "WARNING"
    REVIEW_REQUIRED = "REVIEW_REQUIRED"
    BLOCKING = "BLOCKING"


class UnderwritingDecision(str, Enum):
    """Aggregated underwriting outcome."""

    APPROVED = "APPROVED"
    REQUIRES_MANUAL_REVIEW = "REQUIRES_MANUAL_REVIEW"
    DECLINED = "DECLINED"


@beartype
class RuleResult(BaseModelConfig):
    """Result of evaluating one underwriting rule."""

    rule_name: str
    severity: RuleSeverity
    message: str | None = None
    order: int

    @property
    def is_blocking(self) -> bool:
        return self.severity == RuleSeverity.BLOCKING

    @property
    def requires_review(self) -> bool:
        return self.severity == RuleSeverity.REVIEW_REQUIRED


@beartype
class UnderwritingFacts(BaseModelConfig):
    """Derived values every underwriting rule reads."""

    as_of: date = Field(..., description="Trip start date thresholds are resolved on")
    age: int
    days: int = Field(..., description="Trip length as end minus start")
    country: Country
    coverage_amount: Decimal | None = None


@beartype
class UnderwritingResult(BaseModelConfig):
    """Decision with the rule results it was derived from."""

    decision: UnderwritingDecision
    reason: str | None = None
    rule_results: list[RuleResult] = Field(default_factory=list)

    @property
    def is_approved(self) -> bool:
        return self.decision == UnderwritingDecision.APPROVED

    @property
    def is_declined(self) -> bool:
        return self.decision == UnderwritingDecision.DECLINED

    @property
    def requires_manual_review(self) -> bool:
        return self.decision == UnderwritingDecision.REQUIRES_MANUAL_REVIEW
