"""Premium quote request model.

Fields checked by the validation pipeline are optional here on purpose:
a missing birth date must reach the pipeline and come back as a
``ValidationError`` rather than blow up while the request is being built.
"""

from datetime import date
from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


class CalculationMode(str, Enum):
    """Pricing strategy used for a request."""

    COVERAGE_LEVEL = "COVERAGE_LEVEL"
    COUNTRY_DEFAULT = "COUNTRY_DEFAULT"


@beartype
class PremiumRequest(BaseModelConfig):
    """Travel insurance quote request for a single traveller."""

    person_first_name: str | None = Field(None, description="Traveller first name")
    person_last_name: str | None = Field(None, description="Traveller last name")
    person_birth_date: date | None = Field(None, description="Traveller birth date")
    agreement_date_from: date | None = Field(None, description="Trip start date")
    agreement_date_to: date | None = Field(None, description="Trip end date")
    country_iso_code: str | None = Field(
        None, description="Destination ISO 3166 alpha-2 code"
    )
    medical_risk_limit_level: str | None = Field(
        None, description="Coverage level code, required unless country default is used"
    )
    use_country_default_premium: bool = Field(
        default=False, description="Price with the destination's flat daily rate"
    )
    age_coefficient_enabled: bool | None = Field(
        None, description="Override of the global age coefficient switch"
    )
    selected_risks: list[str | None] = Field(
        default_factory=list, description="Optional risk codes"
    )
    currency: str | None = Field(None, description="Display currency")
    promo_code: str | None = Field(None, description="Promotional code")
    persons_count: int | None = Field(
        None, description="Travellers covered by the quote (defaults to 1)"
    )
    is_corporate: bool = Field(default=False, description="Corporate client")

    @property
    def effective_persons_count(self) -> int:
        """Travellers to price for; missing or non-positive counts mean one."""
        if self.persons_count is None or self.persons_count < 1:
            return 1
        return self.persons_count

    @property
    def requested_mode(self) -> CalculationMode:
        """Pricing mode asked for by the request flag, before any fallback."""
        if self.use_country_default_premium:
            return CalculationMode.COUNTRY_DEFAULT
        return CalculationMode.COVERAGE_LEVEL

    def selected_risk_codes(self) -> list[str]:
        """Non-blank selected risk codes, in request order."""
        return [code for code in self.selected_risks if code and code.strip()]
