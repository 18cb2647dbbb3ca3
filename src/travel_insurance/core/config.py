# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from decimal import Decimal

from beartype import beartype
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PREMIUM_ENGINE_",
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Currency
    supported_currencies: list[str] = Field(
        default_factory=lambda: ["EUR", "USD", "GBP", "CHF", "JPY"],
        min_length=1,
        description="Currencies accepted by the currency validation rule",
    )
    default_currency: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="Currency used when the request does not carry one",
    )

    # Premium floors and thresholds
    minimum_premium: Decimal = Field(
        default=Decimal("10.00"),
        ge=Decimal("0"),
        description="Lowest final premium charged for a positive base premium",
    )
    corporate_min_premium: Decimal = Field(
        default=Decimal("100.00"),
        ge=Decimal("0"),
        description="Premium a corporate client must reach to earn the corporate discount",
    )

    # Calculation
    age_coefficient_enabled: bool = Field(
        default=True,
        description="Apply age coefficients unless reference data or the request overrides it",
    )

    # Validation
    validation_stop_on_critical: bool = Field(
        default=True,
        description="Skip remaining validation rules after a critical failure",
    )
    max_person_age: int = Field(
        default=80,
        ge=1,
        le=120,
        description="Oldest insurable age accepted by validation",
    )
    max_trip_duration_days: int = Field(
        default=365,
        ge=1,
        description="Longest trip (inclusive day count) accepted by validation",
    )
    max_days_in_future: int = Field(
        default=365,
        ge=1,
        description="Trip start further ahead than this produces a warning",
    )
    name_max_length: int = Field(
        default=100,
        ge=1,
        description="Maximum length of first and last name",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )

    @field_validator("supported_currencies")
    @classmethod
    def validate_currencies(cls: type["Settings"], v: list[str]) -> list[str]:
        """Ensure currency codes are three upper-case letters."""
        for code in v:
            if len(code) != 3 or not code.isalpha() or not code.isupper():
                raise ValueError(f"Invalid currency code: {code}")
        return v

    @field_validator("default_currency")
    @classmethod
    def validate_default_currency(
        cls: type["Settings"], v: str, info: ValidationInfo
    ) -> str:
        """Ensure the default currency is one of the supported currencies."""
        supported = info.data.get("supported_currencies")
        if supported is not None and v not in supported:
            raise ValueError(f"Default currency {v} is not in supported currencies")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["Settings"], v: str) -> str:
        """Normalise and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
