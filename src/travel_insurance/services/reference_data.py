"""Effective-dated reference data access.

The engine only ever asks "which record is active on date X"; storage is
the repository's business. :class:`ReferenceDataRepository` is the port the
services depend on. :class:`InMemoryReferenceDataRepository` implements it
over plain lists and is what tests, the demo script and embedding callers
use.

Promo-code redemption is the one write path. It is a conditional
check-and-increment performed under a per-code lock so that two concurrent
redemptions can never both pass the usage-cap check.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from datetime import date
from typing import TypeVar

from beartype import beartype

from ..core.logging_utils import get_logger
from ..models.base import EffectiveDatedModel
from ..models.reference import (
    AgeCoefficient,
    AgeRiskModifier,
    CalculationConfig,
    Country,
    CountryDefaultRate,
    CoverageLevel,
    DurationCoefficient,
    PromoCode,
    RiskBundle,
    RiskType,
    RuleParameter,
)

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=EffectiveDatedModel)


class ReferenceDataRepository(ABC):
    """Point-in-time lookups of reference records.

    Every ``find_*`` method returns the record active on ``as_of`` or
    ``None``; every ``list_*`` method returns all records active on
    ``as_of``. Implementations must be idempotent for reads.
    """

    @abstractmethod
    def find_country(self, iso_code: str, as_of: date) -> Country | None: ...

    @abstractmethod
    def find_coverage_level(self, code: str, as_of: date) -> CoverageLevel | None: ...

    @abstractmethod
    def find_risk_type(self, code: str, as_of: date) -> RiskType | None: ...

    @abstractmethod
    def list_age_coefficients(self, as_of: date) -> list[AgeCoefficient]: ...

    @abstractmethod
    def find_age_risk_modifier(
        self, risk_code: str, age: int, as_of: date
    ) -> AgeRiskModifier | None: ...

    @abstractmethod
    def list_duration_coefficients(self, as_of: date) -> list[DurationCoefficient]: ...

    @abstractmethod
    def list_risk_bundles(self, as_of: date) -> list[RiskBundle]: ...

    @abstractmethod
    def find_promo_code(self, code: str, as_of: date) -> PromoCode | None: ...

    @abstractmethod
    def redeem_promo_code(self, code: str, as_of: date) -> bool:
        """Atomically consume one usage of ``code``.

        Returns ``False`` without side effects when the code is unknown,
        inactive on ``as_of`` or already at its usage cap.
        """

    @abstractmethod
    def find_country_default_rate(
        self, iso_code: str, as_of: date
    ) -> CountryDefaultRate | None: ...

    @abstractmethod
    def find_rule_parameter(
        self, rule_name: str, parameter_name: str, as_of: date
    ) -> RuleParameter | None: ...

    @abstractmethod
    def find_calculation_config(
        self, key: str, as_of: date
    ) -> CalculationConfig | None: ...


def _latest_active(records: Iterable[RecordT], as_of: date) -> RecordT | None:
    """Pick the active record with the most recent ``valid_from``."""
    active = [record for record in records if record.is_active_on(as_of)]
    if not active:
        return None
    return max(active, key=lambda record: record.valid_from)


@beartype
class InMemoryReferenceDataRepository(ReferenceDataRepository):
    """Thread-safe reference data held in memory."""

    def __init__(
        self,
        *,
        countries: Iterable[Country] = (),
        coverage_levels: Iterable[CoverageLevel] = (),
        risk_types: Iterable[RiskType] = (),
        age_coefficients: Iterable[AgeCoefficient] = (),
        age_risk_modifiers: Iterable[AgeRiskModifier] = (),
        duration_coefficients: Iterable[DurationCoefficient] = (),
        risk_bundles: Iterable[RiskBundle] = (),
        promo_codes: Iterable[PromoCode] = (),
        country_default_rates: Iterable[CountryDefaultRate] = (),
        rule_parameters: Iterable[RuleParameter] = (),
        calculation_configs: Iterable[CalculationConfig] = (),
    ) -> None:
        """Initialize the repository with its records."""
        self._countries = list(countries)
        self._coverage_levels = list(coverage_levels)
        self._risk_types = list(risk_types)
        self._age_coefficients = list(age_coefficients)
        self._age_risk_modifiers = list(age_risk_modifiers)
        self._duration_coefficients = list(duration_coefficients)
        self._risk_bundles = list(risk_bundles)
        self._promo_codes = list(promo_codes)
        self._country_default_rates = list(country_default_rates)
        self._rule_parameters = list(rule_parameters)
        self._calculation_configs = list(calculation_configs)

        # Authoritative usage counters; PromoCode records are immutable snapshots.
        self._promo_usage: dict[str, int] = {}
        for promo in self._promo_codes:
            self._promo_usage[promo.code] = max(
                self._promo_usage.get(promo.code, 0), promo.current_usage_count
            )
        self._promo_locks: dict[str, threading.Lock] = {}
        self._promo_locks_guard = threading.Lock()

    def find_country(self, iso_code: str, as_of: date) -> Country | None:
        code = iso_code.strip().upper()
        return _latest_active(
            (c for c in self._countries if c.iso_code == code), as_of
        )

    def find_coverage_level(self, code: str, as_of: date) -> CoverageLevel | None:
        return _latest_active(
            (level for level in self._coverage_levels if level.code == code), as_of
        )

    def find_risk_type(self, code: str, as_of: date) -> RiskType | None:
        return _latest_active(
            (risk for risk in self._risk_types if risk.code == code), as_of
        )

    def list_age_coefficients(self, as_of: date) -> list[AgeCoefficient]:
        return [band for band in self._age_coefficients if band.is_active_on(as_of)]

    def find_age_risk_modifier(
        self, risk_code: str, age: int, as_of: date
    ) -> AgeRiskModifier | None:
        return _latest_active(
            (
                modifier
                for modifier in self._age_risk_modifiers
                if modifier.risk_code == risk_code and modifier.contains(age)
            ),
            as_of,
        )

    def list_duration_coefficients(self, as_of: date) -> list[DurationCoefficient]:
        return [
            band for band in self._duration_coefficients if band.is_active_on(as_of)
        ]

    def list_risk_bundles(self, as_of: date) -> list[RiskBundle]:
        return [bundle for bundle in self._risk_bundles if bundle.is_active_on(as_of)]

    def find_promo_code(self, code: str, as_of: date) -> PromoCode | None:
        normalized = code.strip().upper()
        promo = _latest_active(
            (p for p in self._promo_codes if p.code == normalized), as_of
        )
        if promo is None:
            return None
        return promo.model_copy(
            update={"current_usage_count": self._promo_usage.get(promo.code, 0)}
        )

    def redeem_promo_code(self, code: str, as_of: date) -> bool:
        normalized = code.strip().upper()
        with self._lock_for(normalized):
            promo = _latest_active(
                (p for p in self._promo_codes if p.code == normalized), as_of
            )
            if promo is None:
                return False
            used = self._promo_usage.get(normalized, 0)
            if promo.max_usage_count is not None and used >= promo.max_usage_count:
                logger.info(
                    "Promo code %s reached its usage cap (%d)",
                    normalized,
                    promo.max_usage_count,
                )
                return False
            self._promo_usage[normalized] = used + 1
            logger.debug("Promo code %s redeemed (%d used)", normalized, used + 1)
            return True

    def promo_usage_count(self, code: str) -> int:
        """Current number of redemptions of ``code``."""
        return self._promo_usage.get(code.strip().upper(), 0)

    def find_country_default_rate(
        self, iso_code: str, as_of: date
    ) -> CountryDefaultRate | None:
        code = iso_code.strip().upper()
        return _latest_active(
            (rate for rate in self._country_default_rates if rate.country_iso_code == code),
            as_of,
        )

    def find_rule_parameter(
        self, rule_name: str, parameter_name: str, as_of: date
    ) -> RuleParameter | None:
        return _latest_active(
            (
                parameter
                for parameter in self._rule_parameters
                if parameter.rule_name == rule_name
                and parameter.parameter_name == parameter_name
            ),
            as_of,
        )

    def find_calculation_config(
        self, key: str, as_of: date
    ) -> CalculationConfig | None:
        return _latest_active(
            (config for config in self._calculation_configs if config.key == key),
            as_of,
        )

    def _lock_for(self, code: str) -> AbstractContextManager[bool]:
        with self._promo_locks_guard:
            lock = self._promo_locks.get(code)
            if lock is None:
                lock = threading.Lock()
                self._promo_locks[code] = lock
            return lock
