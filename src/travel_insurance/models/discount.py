"""Discount models for promo codes and group/corporate pricing."""

from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


class DiscountType(str, Enum):
    """Kinds of discounts the resolver can grant."""

    BUNDLE = "BUNDLE"
    PROMO_CODE = "PROMO_CODE"
    GROUP = "GROUP"
    CORPORATE = "CORPORATE"


@beartype
class GroupDiscountTier(BaseModelConfig):
    """Discount catalogue entry for group or corporate clients."""

    code: str
    name: str
    discount_type: DiscountType
    percentage: Decimal = Field(..., gt=Decimal("0"), le=Decimal("100"))
    min_persons_count: int | None = Field(None, ge=1)


@beartype
class AppliedDiscount(BaseModelConfig):
    """Discount granted on a quote."""

    discount_type: DiscountType
    code: str
    description: str
    amount: Decimal = Field(..., ge=Decimal("0"))
    percentage: Decimal | None = Field(
        None, description="Percentage points when the discount is percentage based"
    )


@beartype
class DiscountApplicationResult(BaseModelConfig):
    """Premium after promo and group/corporate discounts."""

    base_premium: Decimal
    applied_discounts: list[AppliedDiscount] = Field(default_factory=list)
    total_discount: Decimal = Field(default=Decimal("0.00"), ge=Decimal("0"))
    final_premium: Decimal
    minimum_premium_applied: bool = False
