"""Ordered, severity-aware validation pipeline for premium requests."""

from collections.abc import Callable, Sequence
from datetime import date

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...models.quote import PremiumRequest
from ..reference_data import ReferenceDataRepository
from .base import (
    ValidationContext,
    ValidationError,
    ValidationRule,
    ValidationSeverity,
    error,
)
from .business import (
    AgeBoundsRule,
    AgreementStartNotTooFarRule,
    DateInPastRule,
    DateRangeRule,
    DuplicateRisksRule,
    MandatoryRisksExcludedRule,
    TripDurationRule,
    TripStartInPastRule,
)
from .reference import (
    CountryExistsRule,
    CoverageLevelExistsRule,
    CurrencySupportedRule,
    RiskTypesExistRule,
    RiskTypesNotMandatoryRule,
)
from .structural import (
    CollectionElementsNotBlankRule,
    ConditionalCoverageLevelRule,
    IsoCodeRule,
    NotBlankRule,
    NotNullRule,
    StringLengthRule,
)

logger = get_logger(__name__)


@beartype
def build_default_rules(
    repository: ReferenceDataRepository, settings: Settings
) -> list[ValidationRule]:
    """Register the standard structural, business and reference rules."""
    return [
        # Structural
        NotNullRule("person_first_name"),
        NotNullRule("person_last_name"),
        NotNullRule("person_birth_date"),
        NotNullRule("agreement_date_from"),
        NotNullRule("agreement_date_to"),
        NotNullRule("country_iso_code"),
        ConditionalCoverageLevelRule(),
        NotBlankRule("person_first_name"),
        NotBlankRule("person_last_name"),
        NotBlankRule("country_iso_code"),
        StringLengthRule("person_first_name", max_length=settings.name_max_length),
        StringLengthRule("person_last_name", max_length=settings.name_max_length),
        CollectionElementsNotBlankRule("selected_risks"),
        IsoCodeRule("country_iso_code"),
        # Business
        DateInPastRule("person_birth_date"),
        DateRangeRule(),
        AgeBoundsRule(max_age=settings.max_person_age),
        TripDurationRule(max_days=settings.max_trip_duration_days),
        AgreementStartNotTooFarRule(max_days_ahead=settings.max_days_in_future),
        TripStartInPastRule(),
        MandatoryRisksExcludedRule(),
        DuplicateRisksRule(),
        # Reference
        CountryExistsRule(repository),
        CoverageLevelExistsRule(repository),
        RiskTypesExistRule(repository),
        RiskTypesNotMandatoryRule(repository),
        CurrencySupportedRule(settings.supported_currencies),
    ]


@beartype
class RequestValidator:
    """Run validation rules in ascending ``order`` and collect their findings.

    Rules sharing an order value run in registration order. Findings are
    returned in evaluation order; nothing is sorted or de-duplicated.
    """

    def __init__(
        self,
        repository: ReferenceDataRepository,
        *,
        settings: Settings | None = None,
        rules: Sequence[ValidationRule] | None = None,
        stop_on_critical: bool | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the pipeline.

        Args:
            repository: Reference data used by the reference tier
            settings: Engine settings (defaults to ``get_settings()``)
            rules: Replacement rule set; the standard rules when omitted
            stop_on_critical: Overrides ``Settings.validation_stop_on_critical``
            clock: Source of "today" for date-in-past style checks
        """
        self._settings = settings or get_settings()
        registered = (
            list(rules)
            if rules is not None
            else build_default_rules(repository, self._settings)
        )
        self._rules = sorted(registered, key=lambda rule: rule.order)
        self._stop_on_critical = (
            self._settings.validation_stop_on_critical
            if stop_on_critical is None
            else stop_on_critical
        )
        self._clock = clock

    @property
    def rules(self) -> list[ValidationRule]:
        return list(self._rules)

    def validate(self, request: PremiumRequest) -> list[ValidationError]:
        """Validate ``request`` and return every finding, warnings included."""
        errors, _ = self.validate_with_context(request)
        return errors

    def validate_with_context(
        self, request: PremiumRequest
    ) -> tuple[list[ValidationError], ValidationContext]:
        """Validate ``request`` and also return the context the rules filled in."""
        context = ValidationContext(as_of=self._clock())
        errors: list[ValidationError] = []

        for rule in self._rules:
            rule_errors = self._run_rule(rule, request, context)
            errors.extend(rule_errors)

            if self._stop_on_critical and self._is_critical_failure(rule, rule_errors):
                logger.info(
                    "Validation stopped after critical failure in %s", rule.name
                )
                break

        if errors:
            logger.debug(
                "Validation produced %d finding(s): %s",
                len(errors),
                [f"{e.field}:{e.severity.value}" for e in errors],
            )
        return errors, context

    def _run_rule(
        self,
        rule: ValidationRule,
        request: PremiumRequest,
        context: ValidationContext,
    ) -> list[ValidationError]:
        try:
            return list(rule.evaluate(request, context))
        except Exception as exc:
            logger.exception("Validation rule %s raised", rule.name)
            return [
                error(
                    "validation.error",
                    f"Validation rule failed: {rule.name} - {exc}",
                    ValidationSeverity.CRITICAL,
                    rule=rule.name,
                )
            ]

    @staticmethod
    def _is_critical_failure(
        rule: ValidationRule, rule_errors: list[ValidationError]
    ) -> bool:
        if any(e.is_critical for e in rule_errors):
            return True
        return rule.is_critical and any(e.is_blocking for e in rule_errors)


@beartype
def has_blocking_errors(errors: Sequence[ValidationError]) -> bool:
    """True when any finding is an error rather than a warning."""
    return any(e.is_blocking for e in errors)
