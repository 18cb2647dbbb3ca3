"""Reference validation rules (order 200-299).

Codes in the request must resolve to records active on the trip start
date. Resolved country and coverage level are kept in the context so the
orchestrator can reuse them.
"""

from collections.abc import Iterable

from beartype import beartype

from ...models.quote import PremiumRequest
from ..reference_data import ReferenceDataRepository
from .base import ValidationContext, ValidationError, ValidationRule, error


@beartype
class CountryExistsRule(ValidationRule):
    """Destination country must exist and be active."""

    def __init__(self, repository: ReferenceDataRepository, *, order: int = 210) -> None:
        self.repository = repository
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        code = request.country_iso_code
        if code is None or not code.strip():
            return []
        as_of = context.reference_date(request)
        country = self.repository.find_country(code, as_of)
        if country is None:
            return [
                error(
                    "country_iso_code",
                    f"Country with ISO code {code} not found or not active on "
                    f"{as_of.isoformat()}!",
                    country_iso_code=code,
                    as_of=as_of.isoformat(),
                )
            ]
        context.country = country
        return []


@beartype
class CoverageLevelExistsRule(ValidationRule):
    """Selected coverage level must exist unless the country default is used."""

    def __init__(self, repository: ReferenceDataRepository, *, order: int = 220) -> None:
        self.repository = repository
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        if request.use_country_default_premium:
            return []
        code = request.medical_risk_limit_level
        if code is None or not code.strip():
            return []
        as_of = context.reference_date(request)
        level = self.repository.find_coverage_level(code, as_of)
        if level is None:
            return [
                error(
                    "medical_risk_limit_level",
                    f"Medical risk limit level {code} not found or not active!",
                    coverage_level=code,
                    as_of=as_of.isoformat(),
                )
            ]
        context.coverage_level = level
        return []


@beartype
class RiskTypesExistRule(ValidationRule):
    """Every selected risk code must exist and be active."""

    def __init__(self, repository: ReferenceDataRepository, *, order: int = 230) -> None:
        self.repository = repository
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        as_of = context.reference_date(request)
        errors: list[ValidationError] = []
        for index, code in enumerate(request.selected_risks):
            if not code or not code.strip():
                continue
            if self.repository.find_risk_type(code, as_of) is None:
                errors.append(
                    error(
                        f"selected_risks[{index}]",
                        f"Risk type {code} not found or not active!",
                        risk_code=code,
                        index=index,
                    )
                )
        return errors


@beartype
class RiskTypesNotMandatoryRule(ValidationRule):
    """Risks flagged mandatory in reference data cannot be selected."""

    def __init__(self, repository: ReferenceDataRepository, *, order: int = 240) -> None:
        self.repository = repository
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        as_of = context.reference_date(request)
        errors: list[ValidationError] = []
        for index, code in enumerate(request.selected_risks):
            if not code or not code.strip():
                continue
            risk = self.repository.find_risk_type(code, as_of)
            if risk is not None and risk.is_mandatory:
                errors.append(
                    error(
                        f"selected_risks[{index}]",
                        f"Risk type {code} is mandatory and included automatically!",
                        risk_code=code,
                        index=index,
                    )
                )
        return errors


@beartype
class CurrencySupportedRule(ValidationRule):
    """Requested currency must be one the engine can quote in."""

    def __init__(self, supported_currencies: Iterable[str], *, order: int = 250) -> None:
        self.supported_currencies = tuple(supported_currencies)
        self.order = order

    def evaluate(
        self, request: PremiumRequest, context: ValidationContext
    ) -> list[ValidationError]:
        currency = request.currency
        if currency is None or not currency.strip():
            return []
        if currency.upper() in self.supported_currencies:
            return []
        return [
            error(
                "currency",
                f"Currency {currency} is not supported! Supported currencies: "
                f"{', '.join(self.supported_currencies)}",
                currency=currency,
                supported=list(self.supported_currencies),
            )
        ]
