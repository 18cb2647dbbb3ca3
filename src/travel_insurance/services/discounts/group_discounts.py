"""Group and corporate discounts.

Group tiers depend on the number of travellers; the corporate discount on
the client type and a premium threshold. Only the single most valuable of
them is granted.
"""

from decimal import Decimal
from typing import Final

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.money import percentage_of
from ...models.discount import AppliedDiscount, DiscountType, GroupDiscountTier

logger = get_logger(__name__)

DEFAULT_GROUP_TIERS: Final = (
    GroupDiscountTier(
        code="GROUP_5",
        name="Group discount (5+ persons)",
        discount_type=DiscountType.GROUP,
        percentage=Decimal("10"),
        min_persons_count=5,
    ),
    GroupDiscountTier(
        code="GROUP_10",
        name="Group discount (10+ persons)",
        discount_type=DiscountType.GROUP,
        percentage=Decimal("15"),
        min_persons_count=10,
    ),
    GroupDiscountTier(
        code="GROUP_20",
        name="Group discount (20+ persons)",
        discount_type=DiscountType.GROUP,
        percentage=Decimal("20"),
        min_persons_count=20,
    ),
)

CORPORATE_TIER: Final = GroupDiscountTier(
    code="CORPORATE",
    name="Corporate discount",
    discount_type=DiscountType.CORPORATE,
    percentage=Decimal("20"),
)


@beartype
class GroupDiscountService:
    """Pick the best of the group and corporate discounts."""

    def __init__(
        self,
        settings: Settings | None = None,
        group_tiers: tuple[GroupDiscountTier, ...] = DEFAULT_GROUP_TIERS,
        corporate_tier: GroupDiscountTier = CORPORATE_TIER,
    ) -> None:
        self._settings = settings or get_settings()
        self._group_tiers = group_tiers
        self._corporate_tier = corporate_tier

    def group_discount(self, premium: Decimal, persons_count: int) -> AppliedDiscount | None:
        """Highest group tier the party size qualifies for."""
        eligible = [
            tier
            for tier in self._group_tiers
            if tier.min_persons_count is not None and persons_count >= tier.min_persons_count
        ]
        if not eligible:
            return None
        tier = max(eligible, key=lambda t: t.percentage)
        return self._applied(tier, premium)

    def corporate_discount(
        self, premium: Decimal, is_corporate: bool
    ) -> AppliedDiscount | None:
        """Corporate discount when the client is corporate and the premium is high enough."""
        if not is_corporate or premium < self._settings.corporate_min_premium:
            return None
        return self._applied(self._corporate_tier, premium)

    def best_discount(
        self, premium: Decimal, persons_count: int, is_corporate: bool
    ) -> AppliedDiscount | None:
        """Larger of the group and corporate discounts; they never stack."""
        candidates = [
            discount
            for discount in (
                self.group_discount(premium, persons_count),
                self.corporate_discount(premium, is_corporate),
            )
            if discount is not None
        ]
        if not candidates:
            return None
        best = max(candidates, key=lambda d: d.amount)
        logger.debug("Best group/corporate discount: %s -%s", best.code, best.amount)
        return best

    @staticmethod
    def _applied(tier: GroupDiscountTier, premium: Decimal) -> AppliedDiscount:
        amount = min(percentage_of(premium, tier.percentage), premium)
        return AppliedDiscount(
            discount_type=tier.discount_type,
            code=tier.code,
            description=tier.name,
            amount=amount,
            percentage=tier.percentage,
        )
