"""Tunable underwriting thresholds with hard-coded fallbacks."""

from datetime import date
from decimal import Decimal, InvalidOperation

from beartype import beartype

from ...core.logging_utils import get_logger
from ..reference_data import ReferenceDataRepository

logger = get_logger(__name__)


@beartype
class RuleParameterService:
    """Resolve ``(rule, parameter)`` thresholds active on a date."""

    def __init__(self, repository: ReferenceDataRepository) -> None:
        self._repository = repository

    def get_decimal(
        self, rule_name: str, parameter_name: str, as_of: date, default: Decimal
    ) -> Decimal:
        parameter = self._repository.find_rule_parameter(rule_name, parameter_name, as_of)
        if parameter is None:
            logger.debug(
                "Parameter %s not found for rule %s, using default: %s",
                parameter_name,
                rule_name,
                default,
            )
            return default
        return parameter.value

    def get_int(
        self, rule_name: str, parameter_name: str, as_of: date, default: int
    ) -> int:
        value = self.get_decimal(rule_name, parameter_name, as_of, Decimal(default))
        try:
            return int(value)
        except (InvalidOperation, ValueError, OverflowError):
            logger.warning(
                "Cannot use %s parameter %s as int: %s, using default: %d",
                rule_name,
                parameter_name,
                value,
                default,
            )
            return default
