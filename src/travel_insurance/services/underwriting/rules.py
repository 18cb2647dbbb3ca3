# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Underwriting rules.

Every rule is independent and side-effect free: it reads the request and
the derived :class:`UnderwritingFacts`, resolves its thresholds through
:class:`RuleParameterService` and returns one :class:`RuleResult`.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.quote import PremiumRequest
from ...models.reference import RiskGroup
from ...models.underwriting import RuleResult, RuleSeverity, UnderwritingFacts
from .parameters import RuleParameterService

logger = get_logger(__name__)


class UnderwritingRule(ABC):
    """Contract of an underwriting rule."""

    name: str
    order: int

    def __init__(self, parameters: RuleParameterService) -> None:
        self.parameters = parameters

    def is_applicable(self, request: PremiumRequest, facts: UnderwritingFacts) -> bool:
        return True

    @abstractmethod
    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        """Assess one risk factor of the application."""

    def _result(self, severity: RuleSeverity, message: str | None = None) -> RuleResult:
        return RuleResult(
            rule_name=self.name, severity=severity, message=message, order=self.order
        )

    def passed(self) -> RuleResult:
        return self._result(RuleSeverity.PASS)


@beartype
class AgeRule(UnderwritingRule):
    """Decline very old travellers and review those close to the limit."""

    name = "AgeRule"
    order = 10

    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        max_age = self.parameters.get_int(self.name, "MAX_AGE", facts.as_of, 80)
        review_age = self.parameters.get_int(
            self.name, "REVIEW_AGE_THRESHOLD", facts.as_of, 75
        )
        logger.debug(
            "Evaluating age rule: age=%d, max_age=%d, review_age=%d",
            facts.age,
            max_age,
            review_age,
        )
        if facts.age > max_age:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Age {facts.age} exceeds maximum allowed age of {max_age}",
            )
        if facts.age >= review_age:
            return self._result(
                RuleSeverity.REVIEW_REQUIRED,
                f"Age {facts.age} requires manual review (threshold: {review_age})",
            )
        return self.passed()


@beartype
class CountryRiskRule(UnderwritingRule):
    """Map the destination risk group to a severity."""

    name = "CountryRiskRule"
    order = 20

    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        country = facts.country
        if country.risk_group == RiskGroup.VERY_HIGH:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Travel to {country.name} is not covered due to very high risk "
                "(war zone, epidemic, etc.)",
            )
        if country.risk_group == RiskGroup.HIGH:
            return self._result(
                RuleSeverity.REVIEW_REQUIRED,
                f"Travel to {country.name} requires manual review due to high risk",
            )
        if country.risk_group == RiskGroup.MEDIUM:
            return self._result(
                RuleSeverity.WARNING,
                f"Travel to {country.name} has medium risk level",
            )
        return self.passed()


@beartype
class MedicalCoverageRule(UnderwritingRule):
    """Limit high medical coverage for older travellers."""

    name = "MedicalCoverageRule"
    order = 30

    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        coverage = facts.coverage_amount
        if coverage is None:
            return self.passed()

        as_of = facts.as_of
        blocking_age = self.parameters.get_int(self.name, "BLOCKING_AGE", as_of, 75)
        blocking_coverage = self.parameters.get_decimal(
            self.name, "BLOCKING_COVERAGE", as_of, Decimal("200000")
        )
        review_age = self.parameters.get_int(self.name, "REVIEW_AGE", as_of, 70)
        review_coverage = self.parameters.get_decimal(
            self.name, "REVIEW_COVERAGE", as_of, Decimal("100000")
        )

        if facts.age > blocking_age and coverage > blocking_coverage:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Coverage of {coverage:.2f} is too high for age {facts.age} "
                f"(max {blocking_coverage:.2f})",
            )
        if facts.age >= review_age and coverage > review_coverage:
            return self._result(
                RuleSeverity.REVIEW_REQUIRED,
                f"High coverage ({coverage:.2f}) for age {facts.age} requires manual review",
            )
        return self.passed()


@beartype
class AdditionalRisksRule(UnderwritingRule):
    """Restrict extreme sport cover by age and destination."""

    name = "AdditionalRisksRule"
    order = 40
    risk_code = "EXTREME_SPORT"

    def is_applicable(self, request: PremiumRequest, facts: UnderwritingFacts) -> bool:
        return self.risk_code in request.selected_risk_codes()

    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        max_age = self.parameters.get_int(self.name, "MAX_AGE", facts.as_of, 70)
        review_age = self.parameters.get_int(self.name, "REVIEW_AGE", facts.as_of, 60)

        if facts.age > max_age:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Extreme sport coverage not available for age {facts.age} "
                f"(max age: {max_age})",
            )
        if facts.country.risk_group == RiskGroup.VERY_HIGH:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Extreme sport coverage not available in {facts.country.name} "
                "(very high risk country)",
            )
        if facts.age >= review_age:
            return self._result(
                RuleSeverity.REVIEW_REQUIRED,
                f"Extreme sport coverage for age {facts.age} requires manual review",
            )
        return self.passed()


@beartype
class TripDurationRule(UnderwritingRule):
    """Decline very long trips and review long ones."""

    name = "TripDurationRule"
    order = 50

    def evaluate(self, request: PremiumRequest, facts: UnderwritingFacts) -> RuleResult:
        max_days = self.parameters.get_int(self.name, "MAX_DAYS", facts.as_of, 180)
        review_days = self.parameters.get_int(self.name, "REVIEW_DAYS", facts.as_of, 90)

        if facts.days > max_days:
            return self._result(
                RuleSeverity.BLOCKING,
                f"Trip duration of {facts.days} days exceeds maximum of {max_days} days",
            )
        if facts.days > review_days:
            return self._result(
                RuleSeverity.REVIEW_REQUIRED,
                f"Trip duration of {facts.days} days requires manual review "
                f"(threshold: {review_days} days)",
            )
        return self.passed()
