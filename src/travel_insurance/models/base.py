# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Base Pydantic model configuration for all domain models.

This module provides the foundation for all domain models in the engine,
enforcing immutability and strict validation, plus the effective-dating
contract shared by every reference record.
"""

from datetime import date

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field, model_validator


@beartype
class BaseModelConfig(BaseModel):
    """Base model with strict configuration for all domain entities.

    Enforces:
    - Immutability (frozen=True)
    - No extra fields allowed (extra="forbid")
    - Validation on assignment
    - Automatic whitespace stripping
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


@beartype
class EffectiveDatedModel(BaseModelConfig):
    """Reference record valid only inside a ``[valid_from, valid_to]`` window."""

    valid_from: date = Field(..., description="First date the record applies")
    valid_to: date | None = Field(
        None, description="Last date the record applies (open-ended when None)"
    )
    is_active: bool = Field(
        default=True, description="Whether the record is switched on at all"
    )

    @model_validator(mode="after")
    def validate_window(self) -> "EffectiveDatedModel":
        """Ensure the validity window is not inverted."""
        if self.valid_to is not None and self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be before valid_from")
        return self

    @beartype
    def is_active_on(self, as_of: date) -> bool:
        """Check whether the record applies on ``as_of``."""
        if not self.is_active:
            return False
        if as_of < self.valid_from:
            return False
        return self.valid_to is None or self.valid_to >= as_of
