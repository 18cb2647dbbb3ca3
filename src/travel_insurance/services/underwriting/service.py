"""Underwriting service: derive facts, run the engine, record the decision."""

from beartype import beartype

from ...core.dates import full_years_between, trip_days
from ...core.exceptions import ConfigurationError, ReferenceDataNotFoundError
from ...core.logging_utils import get_logger
from ...models.premium import PremiumCalculationResult
from ...models.quote import PremiumRequest
from ...models.underwriting import UnderwritingFacts, UnderwritingResult
from ..reference_data import ReferenceDataRepository
from ..validation.base import ValidationContext
from .engine import UnderwritingEngine, build_default_rules
from .parameters import RuleParameterService
from .recorder import DecisionRecorder

logger = get_logger(__name__)


@beartype
class UnderwritingService:
    """Underwrite a validated request."""

    def __init__(
        self,
        repository: ReferenceDataRepository,
        engine: UnderwritingEngine | None = None,
        recorder: DecisionRecorder | None = None,
    ) -> None:
        self._repository = repository
        self._engine = engine or UnderwritingEngine(
            build_default_rules(RuleParameterService(repository))
        )
        self._recorder = recorder

    def evaluate(
        self,
        request: PremiumRequest,
        calculation: PremiumCalculationResult | None = None,
        context: ValidationContext | None = None,
    ) -> UnderwritingResult:
        """Evaluate ``request`` and hand the decision to the recorder.

        Args:
            request: Validated premium request
            calculation: Pricing result; supplies the coverage amount actually
                priced. Without it the coverage level is looked up directly.
            context: Validation context; supplies the destination and age
        """
        facts = self.build_facts(request, calculation, context)
        result = self._engine.evaluate(request, facts)
        self._record(request, result)
        return result

    def build_facts(
        self,
        request: PremiumRequest,
        calculation: PremiumCalculationResult | None = None,
        context: ValidationContext | None = None,
    ) -> UnderwritingFacts:
        birth, start, end = (
            request.person_birth_date,
            request.agreement_date_from,
            request.agreement_date_to,
        )
        if birth is None or start is None or end is None or not request.country_iso_code:
            raise ConfigurationError(
                "Underwriting requires birth date, trip dates and destination"
            )

        if context is not None and context.country is not None:
            country = context.country
        else:
            country = self._repository.find_country(request.country_iso_code, start)
            if country is None:
                raise ReferenceDataNotFoundError(
                    "Country", request.country_iso_code, start
                )

        if context is not None and context.person_age is not None:
            age = context.person_age
        elif calculation is not None:
            age = calculation.age
        else:
            age = full_years_between(birth, start)

        if calculation is not None:
            coverage_amount = calculation.coverage_amount
        elif request.use_country_default_premium or not request.medical_risk_limit_level:
            coverage_amount = None
        elif context is not None and context.coverage_level is not None:
            coverage_amount = context.coverage_level.coverage_amount
        else:
            level = self._repository.find_coverage_level(
                request.medical_risk_limit_level, start
            )
            if level is None:
                raise ReferenceDataNotFoundError(
                    "Coverage level", request.medical_risk_limit_level, start
                )
            coverage_amount = level.coverage_amount

        return UnderwritingFacts(
            as_of=start,
            age=age,
            days=trip_days(start, end),
            country=country,
            coverage_amount=coverage_amount,
        )

    def _record(self, request: PremiumRequest, result: UnderwritingResult) -> None:
        if self._recorder is None:
            return
        try:
            self._recorder.record(request, result)
        except Exception:
            # Audit failures never change the decision.
            logger.exception("Failed to record underwriting decision")
