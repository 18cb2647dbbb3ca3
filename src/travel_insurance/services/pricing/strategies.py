# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Premium calculation strategies and their selection.

Two interchangeable algorithms price a validated request:

- Coverage level: daily rate of the chosen medical coverage level, scaled
  by age, country, duration and optional risk coefficients, then corrected
  for any payout limit.
- Country default: the destination's flat daily premium, which already
  carries the country risk, scaled by age, duration and optional risks.

Strategy selection is resolved once per request by
:func:`select_calculation_mode`. Reference records and the age already
resolved by validation are taken from its context; the repository is only
consulted for what the context lacks.
"""

from abc import ABC, abstractmethod
from datetime import date

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.dates import trip_days
from ...core.exceptions import ConfigurationError, ReferenceDataNotFoundError
from ...core.logging_utils import get_logger
from ...core.money import ONE, round_money
from ...models.premium import PremiumCalculationResult
from ...models.quote import CalculationMode, PremiumRequest
from ...models.reference import Country, CoverageLevel
from ..reference_data import ReferenceDataRepository
from ..validation.base import ValidationContext
from .calculation_steps import CalculationStepsBuilder
from .components import SharedCalculationComponents
from .payout_limit import PayoutLimitCorrector

logger = get_logger(__name__)


def _trip_window(request: PremiumRequest) -> tuple[date, date, date]:
    """Return birth date, trip start and trip end, which validation guarantees."""
    birth = request.person_birth_date
    start = request.agreement_date_from
    end = request.agreement_date_to
    if birth is None or start is None or end is None:
        raise ConfigurationError(
            "Premium calculation requires birth date and trip dates"
        )
    return birth, start, end


def _require_country(
    repository: ReferenceDataRepository,
    request: PremiumRequest,
    as_of: date,
    context: ValidationContext | None = None,
) -> Country:
    code = request.country_iso_code
    if code is None:
        raise ConfigurationError("Premium calculation requires a destination country")
    if context is not None and context.country is not None:
        return context.country
    country = repository.find_country(code, as_of)
    if country is None:
        raise ReferenceDataNotFoundError("Country", code, as_of)
    return country


def _require_coverage_level(
    repository: ReferenceDataRepository,
    code: str,
    as_of: date,
    context: ValidationContext | None = None,
) -> CoverageLevel:
    if context is not None and context.coverage_level is not None:
        return context.coverage_level
    level = repository.find_coverage_level(code, as_of)
    if level is None:
        raise ReferenceDataNotFoundError("Coverage level", code, as_of)
    return level


def _known_age(context: ValidationContext | None) -> int | None:
    return context.person_age if context is not None else None


class PremiumCalculationStrategy(ABC):
    """Common contract of the pricing algorithms."""

    mode: CalculationMode

    @abstractmethod
    def calculate(
        self, request: PremiumRequest, context: ValidationContext | None = None
    ) -> PremiumCalculationResult:
        """Price a validated request, reusing what ``context`` already resolved."""


@beartype
class CoverageLevelStrategy(PremiumCalculationStrategy):
    """Price from the daily rate of the selected medical coverage level."""

    mode = CalculationMode.COVERAGE_LEVEL

    def __init__(
        self,
        repository: ReferenceDataRepository,
        components: SharedCalculationComponents,
    ) -> None:
        self._repository = repository
        self._components = components

    def calculate(
        self, request: PremiumRequest, context: ValidationContext | None = None
    ) -> PremiumCalculationResult:
        birth, start, end = _trip_window(request)
        level_code = request.medical_risk_limit_level
        if level_code is None or not level_code.strip():
            raise ConfigurationError(
                "Coverage-level pricing requires a medical risk limit level"
            )

        days = trip_days(start, end)
        selected = request.selected_risk_codes()

        age = self._components.calculate_age(
            birth,
            start,
            request.age_coefficient_enabled,
            known_age=_known_age(context),
        )
        country = _require_country(self._repository, request, start, context)
        level = _require_coverage_level(self._repository, level_code, start, context)

        duration_coefficient = self._components.get_duration_coefficient(days, start)
        risks = self._components.calculate_additional_risks(selected, age.age, start)

        total_coefficient = (
            age.coefficient
            * country.risk_coefficient
            * duration_coefficient
            * (ONE + risks.total_coefficient)
        )
        raw_premium = round_money(level.daily_rate * total_coefficient * days)

        payout = PayoutLimitCorrector.apply_payout_limit(
            raw_premium, level.coverage_amount, level.max_payout_amount
        )
        premium_before_discount = payout.adjusted_premium
        bundle = self._components.calculate_bundle_discount(
            selected, premium_before_discount, start
        )
        final_premium = round_money(premium_before_discount - bundle.discount_amount)

        medical_premium = (
            level.daily_rate
            * age.coefficient
            * country.risk_coefficient
            * duration_coefficient
            * days
        )
        logger.debug(
            "Coverage level %s: rate=%s coeff=%s days=%d raw=%s final=%s",
            level.code,
            level.daily_rate,
            total_coefficient,
            days,
            raw_premium,
            final_premium,
        )

        return PremiumCalculationResult(
            calculation_mode=self.mode,
            base_rate=level.daily_rate,
            age=age.age,
            age_coefficient=age.coefficient,
            age_group_description=age.description,
            country_coefficient=country.risk_coefficient,
            country_name=country.name,
            duration_coefficient=duration_coefficient,
            additional_risks_coefficient=risks.total_coefficient,
            total_coefficient=total_coefficient,
            days=days,
            coverage_amount=level.coverage_amount,
            premium_before_discount=premium_before_discount,
            risk_details=self._components.build_risk_details(
                medical_premium, risks, start
            ),
            bundle_discount=bundle,
            payout_limit=payout,
            final_premium=final_premium,
            calculation_steps=CalculationStepsBuilder.coverage_level_steps(
                daily_rate=level.daily_rate,
                age_coefficient=age.coefficient,
                country_coefficient=country.risk_coefficient,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=risks.total_coefficient,
                days=days,
                raw_premium=raw_premium,
                payout_limit=payout,
                bundle_discount=bundle.discount_amount,
                final_premium=final_premium,
            ),
            formula=CalculationStepsBuilder.coverage_level_formula(
                daily_rate=level.daily_rate,
                age_coefficient=age.coefficient,
                country_coefficient=country.risk_coefficient,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=risks.total_coefficient,
                days=days,
                final_premium=final_premium,
            ),
        )


@beartype
class CountryDefaultStrategy(PremiumCalculationStrategy):
    """Price from the destination's default daily premium.

    The country coefficient is reported but never multiplied in: the
    default rate already includes it.
    """

    mode = CalculationMode.COUNTRY_DEFAULT

    def __init__(
        self,
        repository: ReferenceDataRepository,
        components: SharedCalculationComponents,
    ) -> None:
        self._repository = repository
        self._components = components

    def calculate(
        self, request: PremiumRequest, context: ValidationContext | None = None
    ) -> PremiumCalculationResult:
        birth, start, end = _trip_window(request)
        country = _require_country(self._repository, request, start, context)
        rate = self._repository.find_country_default_rate(country.iso_code, start)
        if rate is None:
            raise ConfigurationError(
                f"No default day premium for {country.iso_code} on {start.isoformat()}"
            )

        days = trip_days(start, end)
        selected = request.selected_risk_codes()

        age = self._components.calculate_age(
            birth,
            start,
            request.age_coefficient_enabled,
            known_age=_known_age(context),
        )
        duration_coefficient = self._components.get_duration_coefficient(days, start)
        risks = self._components.calculate_additional_risks(selected, age.age, start)

        total_coefficient = (
            age.coefficient * duration_coefficient * (ONE + risks.total_coefficient)
        )
        base_premium = round_money(rate.default_day_premium * total_coefficient * days)
        bundle = self._components.calculate_bundle_discount(
            selected, base_premium, start
        )
        final_premium = round_money(base_premium - bundle.discount_amount)

        medical_premium = (
            rate.default_day_premium * age.coefficient * duration_coefficient * days
        )
        logger.debug(
            "Country default %s: rate=%s coeff=%s days=%d base=%s final=%s",
            country.iso_code,
            rate.default_day_premium,
            total_coefficient,
            days,
            base_premium,
            final_premium,
        )

        return PremiumCalculationResult(
            calculation_mode=self.mode,
            base_rate=rate.default_day_premium,
            age=age.age,
            age_coefficient=age.coefficient,
            age_group_description=age.description,
            country_coefficient=country.risk_coefficient,
            country_name=country.name,
            duration_coefficient=duration_coefficient,
            additional_risks_coefficient=risks.total_coefficient,
            total_coefficient=total_coefficient,
            days=days,
            coverage_amount=None,
            premium_before_discount=base_premium,
            risk_details=self._components.build_risk_details(
                medical_premium, risks, start
            ),
            bundle_discount=bundle,
            payout_limit=None,
            final_premium=final_premium,
            calculation_steps=CalculationStepsBuilder.country_default_steps(
                default_day_premium=rate.default_day_premium,
                age_coefficient=age.coefficient,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=risks.total_coefficient,
                days=days,
                base_premium=base_premium,
                bundle_discount=bundle.discount_amount,
                final_premium=final_premium,
            ),
            formula=CalculationStepsBuilder.country_default_formula(
                default_day_premium=rate.default_day_premium,
                age_coefficient=age.coefficient,
                duration_coefficient=duration_coefficient,
                additional_risks_coefficient=risks.total_coefficient,
                days=days,
                final_premium=final_premium,
            ),
        )


@beartype
def select_calculation_mode(
    request: PremiumRequest,
    repository: ReferenceDataRepository,
    as_of_date: date,
) -> CalculationMode:
    """Decide which strategy prices ``request``.

    Country-default pricing is used only when the request asks for it and
    the destination has a default rate active on ``as_of_date``; every other
    case is priced by coverage level.
    """
    if not request.use_country_default_premium:
        return CalculationMode.COVERAGE_LEVEL

    code = request.country_iso_code
    if code and repository.find_country_default_rate(code, as_of_date) is not None:
        return CalculationMode.COUNTRY_DEFAULT

    logger.info(
        "No default day premium for %s on %s, falling back to coverage level pricing",
        code,
        as_of_date.isoformat(),
    )
    return CalculationMode.COVERAGE_LEVEL


@beartype
class PremiumCalculationService:
    """Resolve the pricing mode once and dispatch to its strategy."""

    def __init__(
        self,
        repository: ReferenceDataRepository,
        settings: Settings | None = None,
        components: SharedCalculationComponents | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or get_settings()
        self._components = components or SharedCalculationComponents(
            repository, self._settings
        )
        self._strategies: dict[CalculationMode, PremiumCalculationStrategy] = {
            CalculationMode.COVERAGE_LEVEL: CoverageLevelStrategy(
                repository, self._components
            ),
            CalculationMode.COUNTRY_DEFAULT: CountryDefaultStrategy(
                repository, self._components
            ),
        }

    @property
    def components(self) -> SharedCalculationComponents:
        return self._components

    def select_mode(self, request: PremiumRequest) -> CalculationMode:
        _, start, _ = _trip_window(request)
        mode = select_calculation_mode(request, self._repository, start)
        if (
            mode == CalculationMode.COVERAGE_LEVEL
            and request.use_country_default_premium
            and not (request.medical_risk_limit_level or "").strip()
        ):
            raise ConfigurationError(
                f"Country default premium requested for {request.country_iso_code} "
                "but no default rate exists and no coverage level was given"
            )
        return mode

    def calculate(
        self, request: PremiumRequest, context: ValidationContext | None = None
    ) -> PremiumCalculationResult:
        """Price ``request`` with the strategy its mode selects.

        Args:
            request: Validated premium request
            context: Validation context of ``request``; its resolved country,
                coverage level and age are reused instead of fetched again
        """
        mode = self.select_mode(request)
        logger.info("Calculating premium in %s mode", mode.value)
        return self._strategies[mode].calculate(request, context)

    def calculate_with(
        self,
        mode: CalculationMode,
        request: PremiumRequest,
        context: ValidationContext | None = None,
    ) -> PremiumCalculationResult:
        """Price ``request`` with an explicitly chosen strategy."""
        return self._strategies[mode].calculate(request, context)
