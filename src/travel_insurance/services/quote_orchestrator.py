# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Premium quote orchestration.

Sequence for one request: validation, strategy selection, premium
calculation, discounts, underwriting, response assembly. The country,
coverage level and age resolved during validation are handed on to
pricing and underwriting. A request that fails validation is answered
with its findings only. Reference data that disappears between validation
and calculation, or settings that make the request unpriceable, raise
:class:`PremiumEngineError` to the caller.
"""

from collections.abc import Callable
from datetime import date

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.exceptions import PremiumEngineError
from ..core.logging_utils import get_logger
from ..models.quote import PremiumRequest
from ..schemas.premium import PremiumResponse
from .discounts.resolver import DiscountResolver
from .pricing.strategies import PremiumCalculationService
from .reference_data import ReferenceDataRepository
from .response_assembler import ResponseAssembler
from .underwriting.recorder import DecisionRecorder
from .underwriting.service import UnderwritingService
from .validation.pipeline import RequestValidator, has_blocking_errors

logger = get_logger(__name__)


@beartype
class PremiumQuoteOrchestrator:
    """Turn a premium request into a priced, underwritten response."""

    def __init__(
        self,
        repository: ReferenceDataRepository,
        *,
        settings: Settings | None = None,
        validator: RequestValidator | None = None,
        calculator: PremiumCalculationService | None = None,
        discounts: DiscountResolver | None = None,
        underwriting: UnderwritingService | None = None,
        assembler: ResponseAssembler | None = None,
        recorder: DecisionRecorder | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Wire the pipeline; any collaborator can be replaced."""
        self._settings = settings or get_settings()
        self._validator = validator or RequestValidator(
            repository, settings=self._settings, clock=clock
        )
        self._calculator = calculator or PremiumCalculationService(
            repository, self._settings
        )
        self._discounts = discounts or DiscountResolver(repository, self._settings)
        self._underwriting = underwriting or UnderwritingService(
            repository, recorder=recorder
        )
        self._assembler = assembler or ResponseAssembler(self._settings)

    def process(self, request: PremiumRequest) -> PremiumResponse:
        """Quote ``request``.

        Returns:
            Response whose ``http_status`` maps validation failure to 400,
            decline to 422, manual review to 202 and approval to 200

        Raises:
            PremiumEngineError: Reference data or configuration make the
                request impossible to price
        """
        findings, context = self._validator.validate_with_context(request)
        if has_blocking_errors(findings):
            logger.info(
                "Request rejected by validation with %d finding(s)", len(findings)
            )
            return self._assembler.validation_failure(findings)

        try:
            calculation = self._calculator.calculate(request, context)
            discounts = self._discounts.apply_discounts(
                request, calculation.final_premium
            )
            underwriting = self._underwriting.evaluate(request, calculation, context)
        except PremiumEngineError:
            logger.exception("Premium calculation failed for %s", request.country_iso_code)
            raise

        logger.info(
            "Quote %s: premium=%s decision=%s",
            calculation.calculation_mode.value,
            discounts.final_premium,
            underwriting.decision.value,
        )
        return self._assembler.quote(
            request,
            calculation,
            discounts,
            underwriting,
            warnings=findings,
        )
