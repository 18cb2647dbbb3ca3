"""Business validation rules (order 100-199).

Bounds and consistency checks over values the structural tier already
proved present. Each rule still tolerates missing values so it can run
when the pipeline does not stop on critical errors.
"""

from collections.abc import Iterable
from datetime import timedelta

from beartype import beartype

from ...core.dates import full_years_between, trip_days_inclusive
from ...models.quote import PremiumRequest
from .base import ValidationContext, ValidationError, ValidationRule, error, warning


@beartype
class DateInPastRule(ValidationRule):
    """Date field must lie strictly before today."""

    def __init__(self, field_name: str = "person_birth_date", *, order: int = 110) -> None:
        self.field_name = field_name
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        value = getattr(request, self.field_name)
        if value is None or value < context.as_of:
            return []
        return [error(self.field_name, f"Field {self.field_name} must be in the past!")]


@beartype
class DateRangeRule(ValidationRule):
    """Trip end must not precede trip start."""

    def __init__(self, *, order: int = 120) -> None:
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        start, end = request.agreement_date_from, request.agreement_date_to
        if start is None or end is None or end >= start:
            return []
        return [
            error(
                "agreement_date_to",
                "Field agreement_date_to must be greater than or equal to "
                "agreement_date_from!",
            )
        ]


@beartype
class AgeBoundsRule(ValidationRule):
    """Traveller age at trip start must fall inside the insurable range.

    Stores the computed age in the context for later tiers.
    """

    def __init__(self, *, min_age: int = 0, max_age: int = 80, order: int = 130) -> None:
        self.min_age = min_age
        self.max_age = max_age
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        birth, start = request.person_birth_date, request.agreement_date_from
        if birth is None or start is None:
            return []
        age = full_years_between(birth, start)
        context.person_age = age
        if age < self.min_age:
            return [
                error(
                    "person_birth_date",
                    f"Person age must be at least {self.min_age} years!",
                    min_age=self.min_age,
                    age=age,
                )
            ]
        if age > self.max_age:
            return [
                error(
                    "person_birth_date",
                    f"Person age must be at most {self.max_age} years!",
                    max_age=self.max_age,
                    age=age,
                )
            ]
        return []


@beartype
class TripDurationRule(ValidationRule):
    """Trip may span at most ``max_days`` calendar days, both ends included.

    Stores the inclusive duration in the context.
    """

    def __init__(self, *, max_days: int = 365, order: int = 140) -> None:
        self.max_days = max_days
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        start, end = request.agreement_date_from, request.agreement_date_to
        if start is None or end is None or end < start:
            return []
        duration = trip_days_inclusive(start, end)
        context.trip_duration_days = duration
        if duration <= self.max_days:
            return []
        return [
            error(
                "agreement_date_to",
                f"Trip duration must not exceed {self.max_days} days!",
                max_days=self.max_days,
                duration=duration,
            )
        ]


@beartype
class AgreementStartNotTooFarRule(ValidationRule):
    """Warn when the trip starts more than ``max_days_ahead`` days from today."""

    def __init__(self, *, max_days_ahead: int = 365, order: int = 145) -> None:
        self.max_days_ahead = max_days_ahead
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        start = request.agreement_date_from
        if start is None:
            return []
        if start <= context.as_of + timedelta(days=self.max_days_ahead):
            return []
        return [
            warning(
                "agreement_date_from",
                f"Trip start date is more than {self.max_days_ahead} days in the future",
                max_days_ahead=self.max_days_ahead,
            )
        ]


@beartype
class TripStartInPastRule(ValidationRule):
    """Warn when the trip has already started."""

    def __init__(self, *, order: int = 150) -> None:
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        start = request.agreement_date_from
        if start is None or start >= context.as_of:
            return []
        return [
            warning(
                "agreement_date_from",
                "Trip start date is in the past. Coverage may not apply retroactively",
            )
        ]


@beartype
class MandatoryRisksExcludedRule(ValidationRule):
    """Mandatory risks are always included and must not be selected explicitly."""

    def __init__(
        self, mandatory_codes: Iterable[str] = ("TRAVEL_MEDICAL",), *, order: int = 160
    ) -> None:
        self.mandatory_codes = frozenset(mandatory_codes)
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        return [
            error(
                "selected_risks",
                f"Risk {code} is mandatory and must not be selected explicitly!",
                risk_code=code,
            )
            for code in dict.fromkeys(request.selected_risk_codes())
            if code in self.mandatory_codes
        ]


@beartype
class DuplicateRisksRule(ValidationRule):
    """Each risk may be selected once; every repeat is reported at its own index."""

    def __init__(self, *, order: int = 165) -> None:
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        seen: set[str] = set()
        errors: list[ValidationError] = []
        for index, code in enumerate(request.selected_risks):
            if not code or not code.strip():
                continue
            if code in seen:
                errors.append(
                    error(
                        f"selected_risks[{index}]",
                        f"Risk {code} is selected more than once!",
                        risk_code=code,
                        index=index,
                    )
                )
            seen.add(code)
        return errors
