"""Validation findings returned to callers."""

from enum import Enum
from typing import Any

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


class ValidationSeverity(str, Enum):
    """Severity of a validation finding, mildest first."""

    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@beartype
class ValidationError(BaseModelConfig):
    """Single validation finding reported back to the caller."""

    field: str = Field(..., min_length=1, description="Request field path")
    message: str = Field(..., min_length=1, description="Human-readable message")
    severity: ValidationSeverity = Field(default=ValidationSeverity.ERROR)
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Machine-readable details"
    )

    @property
    def is_blocking(self) -> bool:
        """Errors and critical errors stop the quote; warnings do not."""
        return self.severity != ValidationSeverity.WARNING

    @property
    def is_critical(self) -> bool:
        return self.severity == ValidationSeverity.CRITICAL
