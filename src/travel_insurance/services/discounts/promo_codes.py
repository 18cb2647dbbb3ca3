"""Promo code evaluation and redemption."""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...core.money import ZERO, percentage_of, round_money
from ...core.result_types import Err, Ok, Result
from ...models.discount import AppliedDiscount, DiscountType
from ...models.reference import PromoCode, PromoDiscountType
from ..reference_data import ReferenceDataRepository

logger = get_logger(__name__)


@beartype
class PromoCodeService:
    """Validate promo codes against a premium and consume their usage."""

    def __init__(self, repository: ReferenceDataRepository) -> None:
        self._repository = repository

    def evaluate(
        self, code: str, as_of_date: date, premium: Decimal
    ) -> Result[AppliedDiscount, str]:
        """Check ``code`` and compute its discount without redeeming it.

        Returns:
            Result containing the discount, or the reason the code cannot be used
        """
        normalized = code.strip().upper()
        if not normalized:
            return Err("Promo code is empty")

        promo = self._repository.find_promo_code(normalized, as_of_date)
        if promo is None:
            return Err(
                f"Promo code {normalized} not found or not valid on "
                f"{as_of_date.isoformat()}"
            )

        if promo.usage_exhausted:
            return Err(f"Promo code {normalized} reached its usage limit")

        if promo.min_premium_amount is not None and premium < promo.min_premium_amount:
            return Err(
                f"Premium {premium} is below the minimum {promo.min_premium_amount} "
                f"required by promo code {normalized}"
            )

        amount = self.calculate_discount(promo, premium)
        if amount <= ZERO:
            return Err(f"Promo code {normalized} yields no discount")

        percentage = (
            promo.discount_value
            if promo.discount_type == PromoDiscountType.PERCENTAGE
            else None
        )
        return Ok(
            AppliedDiscount(
                discount_type=DiscountType.PROMO_CODE,
                code=promo.code,
                description=promo.description or f"Promo code {promo.code}",
                amount=amount,
                percentage=percentage,
            )
        )

    def redeem(
        self, code: str, as_of_date: date, premium: Decimal
    ) -> Result[AppliedDiscount, str]:
        """Evaluate ``code`` and, when usable, atomically consume one usage."""
        result = self.evaluate(code, as_of_date, premium)
        if result.is_err():
            return result
        discount = result.unwrap()
        if not self._repository.redeem_promo_code(discount.code, as_of_date):
            return Err(f"Promo code {discount.code} could not be redeemed")
        logger.info("Promo code %s applied: -%s", discount.code, discount.amount)
        return Ok(discount)

    @staticmethod
    def calculate_discount(promo: PromoCode, premium: Decimal) -> Decimal:
        """Discount granted by ``promo`` on ``premium``, capped at both limits."""
        if promo.discount_type == PromoDiscountType.PERCENTAGE:
            amount = percentage_of(premium, promo.discount_value)
        else:
            amount = promo.discount_value

        if promo.max_discount_amount is not None and amount > promo.max_discount_amount:
            amount = promo.max_discount_amount
        if amount > premium:
            amount = premium
        return round_money(max(amount, ZERO))
