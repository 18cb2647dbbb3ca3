"""Structural validation rules (order 10-99).

These check presence and shape only. Missing required values are
``CRITICAL`` because every later tier assumes them.
"""

import re

from beartype import beartype

from ...models.quote import PremiumRequest
from .base import (
    ValidationContext,
    ValidationError,
    ValidationRule,
    ValidationSeverity,
    error,
)

ISO_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


@beartype
class NotNullRule(ValidationRule):
    """Required field must be present."""

    def __init__(self, field_name: str, *, order: int = 10) -> None:
        self.field_name = field_name
        self.order = order
        self.is_critical = True

    @property
    def name(self) -> str:
        return f"NotNullRule[{self.field_name}]"

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        if getattr(request, self.field_name) is not None:
            return []
        return [
            error(
                self.field_name,
                f"Field {self.field_name} must not be null!",
                ValidationSeverity.CRITICAL,
            )
        ]


@beartype
class ConditionalCoverageLevelRule(ValidationRule):
    """Coverage level is required unless the country default rate is used."""

    field_name = "medical_risk_limit_level"

    def __init__(self, *, order: int = 15) -> None:
        self.order = order
        self.is_critical = True

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        if request.use_country_default_premium:
            return []
        value = request.medical_risk_limit_level
        if value is None:
            return [
                error(
                    self.field_name,
                    f"Field {self.field_name} must not be null!",
                    ValidationSeverity.CRITICAL,
                )
            ]
        if not value.strip():
            return [
                error(self.field_name, f"Field {self.field_name} must not be empty!")
            ]
        return []


@beartype
class NotBlankRule(ValidationRule):
    """Present string field must contain non-whitespace text."""

    def __init__(self, field_name: str, *, order: int = 20) -> None:
        self.field_name = field_name
        self.order = order

    @property
    def name(self) -> str:
        return f"NotBlankRule[{self.field_name}]"

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        value = getattr(request, self.field_name)
        if value is None or value.strip():
            return []
        return [error(self.field_name, f"Field {self.field_name} must not be empty!")]


@beartype
class StringLengthRule(ValidationRule):
    """Present, non-blank string field must fit the allowed length."""

    def __init__(
        self, field_name: str, *, min_length: int = 1, max_length: int, order: int = 30
    ) -> None:
        self.field_name = field_name
        self.min_length = min_length
        self.max_length = max_length
        self.order = order

    @property
    def name(self) -> str:
        return f"StringLengthRule[{self.field_name}]"

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        value = getattr(request, self.field_name)
        if value is None or not value.strip():
            return []
        length = len(value)
        if self.min_length <= length <= self.max_length:
            return []
        return [
            error(
                self.field_name,
                f"Field {self.field_name} length must be between "
                f"{self.min_length} and {self.max_length} characters!",
                min_length=self.min_length,
                max_length=self.max_length,
                actual_length=length,
            )
        ]


@beartype
class CollectionElementsNotBlankRule(ValidationRule):
    """Every element of a string list must be non-blank."""

    def __init__(self, field_name: str = "selected_risks", *, order: int = 35) -> None:
        self.field_name = field_name
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        values = getattr(request, self.field_name) or []
        return [
            error(
                f"{self.field_name}[{index}]",
                f"Field {self.field_name}[{index}] must not be empty!",
                index=index,
            )
            for index, value in enumerate(values)
            if not value or not value.strip()
        ]


@beartype
class IsoCodeRule(ValidationRule):
    """Country code must be exactly two upper-case letters."""

    def __init__(self, field_name: str = "country_iso_code", *, order: int = 40) -> None:
        self.field_name = field_name
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        value = getattr(request, self.field_name)
        if value is None or not value.strip():
            return []
        if ISO_CODE_PATTERN.match(value):
            return []
        return [
            error(
                self.field_name,
                f"Field {self.field_name} must be a 2-letter upper-case ISO code!",
                value=value,
            )
        ]
