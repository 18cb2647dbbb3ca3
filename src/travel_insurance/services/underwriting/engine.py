"""Underwriting rule engine.

All applicable rules always run; rule order only decides which message is
reported when several rules object. The decision is the worst outcome:
any ``BLOCKING`` declines, otherwise any ``REVIEW_REQUIRED`` sends the
application to manual review. ``WARNING`` never changes the decision.
"""

from collections.abc import Sequence

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.quote import PremiumRequest
from ...models.underwriting import (
    RuleResult,
    RuleSeverity,
    UnderwritingDecision,
    UnderwritingFacts,
    UnderwritingResult,
)
from .parameters import RuleParameterService
from .rules import (
    AdditionalRisksRule,
    AgeRule,
    CountryRiskRule,
    MedicalCoverageRule,
    TripDurationRule,
    UnderwritingRule,
)

logger = get_logger(__name__)


@beartype
def build_default_rules(parameters: RuleParameterService) -> list[UnderwritingRule]:
    return [
        AgeRule(parameters),
        CountryRiskRule(parameters),
        MedicalCoverageRule(parameters),
        AdditionalRisksRule(parameters),
        TripDurationRule(parameters),
    ]


@beartype
class UnderwritingEngine:
    """Evaluate every applicable rule and aggregate one decision."""

    def __init__(self, rules: Sequence[UnderwritingRule]) -> None:
        self._rules = sorted(rules, key=lambda rule: rule.order)

    @property
    def rules(self) -> list[UnderwritingRule]:
        return list(self._rules)

    def evaluate(
        self, request: PremiumRequest, facts: UnderwritingFacts
    ) -> UnderwritingResult:
        results: list[RuleResult] = []
        for rule in self._rules:
            if not rule.is_applicable(request, facts):
                continue
            result = self._run_rule(rule, request, facts)
            logger.debug("%s -> %s", rule.name, result.severity.value)
            results.append(result)

        decision, reason = self.aggregate(results)
        logger.info("Underwriting decision: %s (%s)", decision.value, reason or "no findings")
        return UnderwritingResult(decision=decision, reason=reason, rule_results=results)

    @staticmethod
    def aggregate(
        results: Sequence[RuleResult],
    ) -> tuple[UnderwritingDecision, str | None]:
        """Fold rule results into a decision and its reason."""
        ordered = sorted(results, key=lambda result: result.order)
        blocking = [r for r in ordered if r.severity == RuleSeverity.BLOCKING]
        if blocking:
            return UnderwritingDecision.DECLINED, blocking[0].message
        review = [r for r in ordered if r.severity == RuleSeverity.REVIEW_REQUIRED]
        if review:
            return UnderwritingDecision.REQUIRES_MANUAL_REVIEW, review[0].message
        return UnderwritingDecision.APPROVED, None

    @staticmethod
    def _run_rule(
        rule: UnderwritingRule, request: PremiumRequest, facts: UnderwritingFacts
    ) -> RuleResult:
        try:
            return rule.evaluate(request, facts)
        except Exception as exc:
            logger.exception("Underwriting rule %s raised", rule.name)
            return RuleResult(
                rule_name=rule.name,
                severity=RuleSeverity.BLOCKING,
                message=f"Error evaluating rule {rule.name}: {exc}",
                order=rule.order,
            )
