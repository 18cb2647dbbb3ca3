"""Tests for underwriting aggregation."""

from datetime import date
from decimal import Decimal

from travel_insurance.models.reference import Country, RiskGroup
from travel_insurance.models.underwriting import (
    RuleResult,
    RuleSeverity,
    UnderwritingDecision,
    UnderwritingFacts,
)
from travel_insurance.services.underwriting.engine import UnderwritingEngine
from travel_insurance.services.underwriting.parameters import RuleParameterService
from travel_insurance.services.underwriting.rules import UnderwritingRule


def _result(name, severity, order, message=None):
    return RuleResult(rule_name=name, severity=severity, message=message, order=order)


class StubRule(UnderwritingRule):
    """Rule returning a fixed severity."""

    def __init__(self, parameters, name, order, severity, message=None):
        super().__init__(parameters)
        self.name = name
        self.order = order
        self.severity = severity
        self.message = message

    def evaluate(self, request, facts):
        return self._result(self.severity, self.message)


class BrokenRule(UnderwritingRule):
    name = "BrokenRule"
    order = 5

    def evaluate(self, request, facts):
        raise RuntimeError("lookup failed")


def _facts():
    return UnderwritingFacts(
        as_of=date(2025, 7, 1),
        age=35,
        days=14,
        country=Country(
            iso_code="ES",
            name="Spain",
            risk_group=RiskGroup.LOW,
            risk_coefficient=Decimal("1.0"),
            valid_from=date(2020, 1, 1),
        ),
        coverage_amount=Decimal("10000"),
    )


class TestAggregate:
    """Decision folding."""

    def test_blocking_declines(self):
        """Test one blocking result among passes declines."""
        results = [
            _result("A", RuleSeverity.PASS, 10),
            _result("B", RuleSeverity.BLOCKING, 20, "too risky"),
            _result("C", RuleSeverity.PASS, 30),
            _result("D", RuleSeverity.PASS, 40),
        ]

        assert UnderwritingEngine.aggregate(results) == (
            UnderwritingDecision.DECLINED,
            "too risky",
        )

    def test_blocking_beats_review(self):
        results = [
            _result("A", RuleSeverity.REVIEW_REQUIRED, 10, "review"),
            _result("B", RuleSeverity.BLOCKING, 20, "blocked"),
        ]

        assert UnderwritingEngine.aggregate(results)[0] == UnderwritingDecision.DECLINED

    def test_first_review_by_order(self):
        results = [
            _result("B", RuleSeverity.REVIEW_REQUIRED, 50, "second"),
            _result("A", RuleSeverity.REVIEW_REQUIRED, 10, "first"),
        ]

        assert UnderwritingEngine.aggregate(results) == (
            UnderwritingDecision.REQUIRES_MANUAL_REVIEW,
            "first",
        )

    def test_warnings_approve(self):
        results = [_result("A", RuleSeverity.WARNING, 10, "medium risk")]

        assert UnderwritingEngine.aggregate(results) == (UnderwritingDecision.APPROVED, None)

    def test_no_results_approve(self):
        assert UnderwritingEngine.aggregate([]) == (UnderwritingDecision.APPROVED, None)


class TestEngineEvaluate:
    """Running rules."""

    def test_all_rules_run(self, unit_repository, make_request):
        parameters = RuleParameterService(unit_repository)
        engine = UnderwritingEngine(
            [
                StubRule(parameters, "Late", 30, RuleSeverity.PASS),
                StubRule(parameters, "Block", 10, RuleSeverity.BLOCKING, "no"),
                StubRule(parameters, "Review", 20, RuleSeverity.REVIEW_REQUIRED, "maybe"),
            ]
        )

        result = engine.evaluate(make_request(), _facts())

        assert [r.rule_name for r in result.rule_results] == ["Block", "Review", "Late"]
        assert result.is_declined
        assert result.reason == "no"

    def test_rule_error_blocks(self, unit_repository, make_request):
        engine = UnderwritingEngine([BrokenRule(RuleParameterService(unit_repository))])

        result = engine.evaluate(make_request(), _facts())

        assert result.decision == UnderwritingDecision.DECLINED
        assert result.reason == "Error evaluating rule BrokenRule: lookup failed"
