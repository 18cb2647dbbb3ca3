"""Building blocks shared by all request validation rules.

A rule is a small object with a ``name``, a numeric ``order`` and an
``is_critical`` flag. ``evaluate`` returns the errors it found (possibly
none) and never raises on bad input; the pipeline still guards against
unexpected exceptions. Rules that derive a value other rules need (age,
trip duration, resolved reference records) write it into the typed
:class:`ValidationContext`.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from attrs import define
from beartype import beartype

from ...models.quote import PremiumRequest
from ...models.reference import Country, CoverageLevel
from ...models.validation import ValidationError, ValidationSeverity


@define
class ValidationContext:
    """Per-request scratch state written by earlier rules, read by later ones."""

    as_of: date
    person_age: int | None = None
    trip_duration_days: int | None = None
    country: Country | None = None
    coverage_level: CoverageLevel | None = None

    def reference_date(self, request: PremiumRequest) -> date:
        """Date reference records are resolved against: trip start, else today."""
        return request.agreement_date_from or self.as_of


class ValidationRule(ABC):
    """Contract every validation rule implements."""

    order: int = 100
    is_critical: bool = False

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        """Return the findings for ``request``; an empty list means it passed."""

    def __repr__(self) -> str:
        return f"{self.name}(order={self.order})"


@beartype
def error(
    field: str,
    message: str,
    severity: ValidationSeverity = ValidationSeverity.ERROR,
    **parameters: Any,
) -> ValidationError:
    """Build a :class:`ValidationError` with optional parameters."""
    return ValidationError(
        field=field, message=message, severity=severity, parameters=parameters
    )


@beartype
def warning(field: str, message: str, **parameters: Any) -> ValidationError:
    return error(field, message, ValidationSeverity.WARNING, **parameters)
