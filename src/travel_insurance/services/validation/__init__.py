# PolicyCore - Policy Decision Management System
"""Request validation pipeline.

Rules run in ascending order across three tiers:
- Structural (10-99): presence and shape
- Business (100-199): bounds and consistency
- Reference (200-299): codes resolve to active reference records
"""

from .base import (
    ValidationContext,
    ValidationError,
    ValidationRule,
    ValidationSeverity,
)
from .pipeline import RequestValidator, build_default_rules, has_blocking_errors

__all__ = [
    "RequestValidator",
    "ValidationContext",
    "ValidationError",
    "ValidationRule",
    "ValidationSeverity",
    "build_default_rules",
    "has_blocking_errors",
]
