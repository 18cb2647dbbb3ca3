"""Discount resolution on top of the calculated premium."""

from decimal import Decimal

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.money import ZERO, round_money
from ...models.discount import AppliedDiscount, DiscountApplicationResult
from ...models.quote import PremiumRequest
from ..reference_data import ReferenceDataRepository
from .group_discounts import GroupDiscountService
from .promo_codes import PromoCodeService

logger = get_logger(__name__)


@beartype
class DiscountResolver:
    """Combine a promo code with the best group or corporate discount.

    The promo code and the group/corporate discount are both computed on the
    same base premium and added together. The result never drops below the
    configured minimum premium unless the base premium itself is zero or
    negative.
    """

    def __init__(
        self,
        repository: ReferenceDataRepository,
        settings: Settings | None = None,
        promo_codes: PromoCodeService | None = None,
        group_discounts: GroupDiscountService | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._promo_codes = promo_codes or PromoCodeService(repository)
        self._group_discounts = group_discounts or GroupDiscountService(self._settings)

    def apply_discounts(
        self, request: PremiumRequest, base_premium: Decimal
    ) -> DiscountApplicationResult:
        """Apply every discount ``request`` is entitled to.

        Args:
            request: Validated premium request
            base_premium: Premium after bundle discount

        Returns:
            Applied discounts, their total and the final premium
        """
        if base_premium <= ZERO:
            return DiscountApplicationResult(
                base_premium=base_premium, final_premium=round_money(ZERO)
            )

        applied: list[AppliedDiscount] = []

        if request.promo_code and request.promo_code.strip():
            as_of = request.agreement_date_from
            if as_of is None:
                logger.warning("Promo code ignored: request has no trip start date")
            else:
                result = self._promo_codes.redeem(request.promo_code, as_of, base_premium)
                if result.is_ok():
                    applied.append(result.unwrap())
                else:
                    logger.warning("Promo code dropped: %s", result.unwrap_err())

        best = self._group_discounts.best_discount(
            base_premium, request.effective_persons_count, request.is_corporate
        )
        if best is not None:
            applied.append(best)

        total = round_money(sum((d.amount for d in applied), ZERO))
        final = round_money(base_premium - total)
        minimum_applied = False
        if final < self._settings.minimum_premium:
            final = self._settings.minimum_premium
            minimum_applied = True
            logger.info(
                "Final premium raised to minimum premium %s",
                self._settings.minimum_premium,
            )

        return DiscountApplicationResult(
            base_premium=base_premium,
            applied_discounts=applied,
            total_discount=total,
            final_premium=final,
            minimum_premium_applied=minimum_applied,
        )
