"""Tests for the request validation pipeline."""

from datetime import date, timedelta

import pytest

from travel_insurance.core.config import Settings
from travel_insurance.services.validation import (
    RequestValidator,
    ValidationRule,
    ValidationSeverity,
    has_blocking_errors,
)
from travel_insurance.services.validation.base import error, warning


class RecordingRule(ValidationRule):
    """Rule that records when it ran and returns canned findings."""

    def __init__(self, label, order, calls, findings=(), critical=False):
        self.label = label
        self.order = order
        self.calls = calls
        self.findings = list(findings)
        self.is_critical = critical

    @property
    def name(self):
        return self.label

    def evaluate(self, request, context):
        self.calls.append(self.label)
        return list(self.findings)


class ExplodingRule(ValidationRule):
    order = 50

    def evaluate(self, request, context):
        raise RuntimeError("boom")


@pytest.fixture
def validator(seeded_repository, clock):
    return RequestValidator(seeded_repository, settings=Settings(), clock=clock)


class TestDefaultPipeline:
    """Standard rule set against the seeded tariff."""

    def test_valid_request_has_no_findings(self, validator, make_request):
        assert validator.validate(make_request()) == []

    def test_rules_sorted_by_order(self, validator):
        orders = [rule.order for rule in validator.rules]
        assert orders == sorted(orders)

    def test_stops_after_first_critical(self, validator, make_request):
        """Test the first missing required field ends validation."""
        request = make_request(person_first_name=None, person_last_name=None)

        errors = validator.validate(request)

        assert [e.field for e in errors] == ["person_first_name"]
        assert errors[0].severity == ValidationSeverity.CRITICAL

    def test_collects_all_without_stop(self, seeded_repository, clock, make_request):
        validator = RequestValidator(
            seeded_repository, settings=Settings(), stop_on_critical=False, clock=clock
        )
        request = make_request(person_first_name=None, person_last_name=None)

        fields = [e.field for e in validator.validate(request)]

        assert fields[:2] == ["person_first_name", "person_last_name"]

    def test_stop_setting_respected(self, seeded_repository, clock, make_request):
        validator = RequestValidator(
            seeded_repository,
            settings=Settings(validation_stop_on_critical=False),
            clock=clock,
        )
        request = make_request(person_first_name=None, person_last_name=None)

        assert len(validator.validate(request)) >= 2

    def test_non_critical_errors_accumulate(self, validator, make_request):
        request = make_request(
            person_first_name="A" * 101,
            selected_risks=["LUGGAGE_LOSS", "LUGGAGE_LOSS"],
            currency="SEK",
        )

        fields = [e.field for e in validator.validate(request)]

        assert fields == ["person_first_name", "selected_risks[1]", "currency"]

    def test_age_over_limit(self, validator, make_request):
        errors = validator.validate(make_request(person_birth_date=date(1944, 7, 1)))

        assert [e.message for e in errors] == ["Person age must be at most 80 years!"]

    def test_travel_medical_selected(self, validator, make_request):
        errors = validator.validate(make_request(selected_risks=["TRAVEL_MEDICAL"]))

        assert {e.field for e in errors} == {"selected_risks", "selected_risks[0]"}
        assert has_blocking_errors(errors)

    def test_country_default_without_level(self, validator, make_request):
        request = make_request(
            use_country_default_premium=True, medical_risk_limit_level=None
        )
        assert validator.validate(request) == []

    def test_context_filled(self, validator, make_request):
        errors, context = validator.validate_with_context(make_request())

        assert errors == []
        assert context.person_age == 35
        assert context.trip_duration_days == 15
        assert context.country is not None
        assert context.coverage_level is not None


class TestCustomRules:
    """Pipeline mechanics with hand-made rules."""

    def test_runs_in_order_not_registration(self, unit_repository, make_request):
        calls = []
        rules = [
            RecordingRule("late", 300, calls),
            RecordingRule("early", 5, calls),
            RecordingRule("middle", 150, calls),
        ]

        RequestValidator(unit_repository, settings=Settings(), rules=rules).validate(
            make_request()
        )

        assert calls == ["early", "middle", "late"]

    def test_critical_rule_error_stops(self, unit_repository, make_request):
        calls = []
        rules = [
            RecordingRule("gate", 10, calls, [error("x", "bad")], critical=True),
            RecordingRule("after", 20, calls),
        ]

        errors = RequestValidator(
            unit_repository, settings=Settings(), rules=rules
        ).validate(make_request())

        assert calls == ["gate"]
        assert [e.field for e in errors] == ["x"]

    def test_warning_from_critical_rule_does_not_stop(self, unit_repository, make_request):
        calls = []
        rules = [
            RecordingRule("gate", 10, calls, [warning("x", "hmm")], critical=True),
            RecordingRule("after", 20, calls),
        ]

        errors = RequestValidator(
            unit_repository, settings=Settings(), rules=rules
        ).validate(make_request())

        assert calls == ["gate", "after"]
        assert not has_blocking_errors(errors)

    def test_rule_exception_becomes_critical(self, unit_repository, make_request):
        calls = []
        rules = [ExplodingRule(), RecordingRule("after", 60, calls)]

        errors = RequestValidator(
            unit_repository, settings=Settings(), rules=rules
        ).validate(make_request())

        assert len(errors) == 1
        assert errors[0].field == "validation.error"
        assert errors[0].severity == ValidationSeverity.CRITICAL
        assert errors[0].message == "Validation rule failed: ExplodingRule - boom"
        assert calls == []


class TestBoundarySweeps:
    """Whole insurable ranges through the default pipeline."""

    def test_every_insurable_age_passes(self, validator, make_request):
        start = date(2025, 7, 1)
        for age in range(0, 81):
            birth = date(start.year - age, start.month, start.day)
            if age == 0:
                birth = date(2025, 5, 1)

            errors = validator.validate(make_request(person_birth_date=birth))

            assert errors == [], age

    def test_every_trip_length_up_to_a_year_passes(self, validator, make_request):
        start = date(2025, 7, 1)
        for length in range(1, 366):
            end = start + timedelta(days=length - 1)

            errors = validator.validate(
                make_request(agreement_date_from=start, agreement_date_to=end)
            )

            assert errors == [], length

    def test_trip_of_366_days_fails(self, validator, make_request):
        start = date(2025, 7, 1)
        request = make_request(
            agreement_date_from=start, agreement_date_to=start + timedelta(days=365)
        )

        errors = validator.validate(request)

        assert [e.parameters["max_days"] for e in errors] == [365]
