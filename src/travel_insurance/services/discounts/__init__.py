# PolicyCore - Policy Decision Management System
"""Discount services: promo codes, group/corporate discounts and their resolution."""

from .group_discounts import CORPORATE_TIER, DEFAULT_GROUP_TIERS, GroupDiscountService
from .promo_codes import PromoCodeService
from .resolver import DiscountResolver

__all__ = [
    "CORPORATE_TIER",
    "DEFAULT_GROUP_TIERS",
    "DiscountResolver",
    "GroupDiscountService",
    "PromoCodeService",
]
