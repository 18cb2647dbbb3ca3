"""Payout-limit correction of coverage-level premiums."""

from decimal import ROUND_HALF_UP, Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...core.money import RATIO_PRECISION, round_money
from ...models.premium import PayoutLimitResult

logger = get_logger(__name__)


@beartype
class PayoutLimitCorrector:
    """Scale a premium down when the insurer's liability is capped below coverage."""

    @staticmethod
    def apply_payout_limit(
        raw_premium: Decimal,
        coverage_amount: Decimal,
        max_payout_amount: Decimal | None,
    ) -> PayoutLimitResult:
        """Apply the payout cap to ``raw_premium``.

        Args:
            raw_premium: Premium computed on the full coverage amount
            coverage_amount: Insured amount of the coverage level
            max_payout_amount: Liability cap, ``None`` when uncapped

        Returns:
            Adjusted premium, the limit in force and whether it changed anything
        """
        if max_payout_amount is None or max_payout_amount >= coverage_amount:
            return PayoutLimitResult(
                adjusted_premium=raw_premium,
                applied_limit=(
                    max_payout_amount
                    if max_payout_amount is not None
                    else coverage_amount
                ),
                was_applied=False,
            )

        ratio = (max_payout_amount / coverage_amount).quantize(
            RATIO_PRECISION, rounding=ROUND_HALF_UP
        )
        adjusted = round_money(raw_premium * ratio)
        logger.debug(
            "Payout limit %s on coverage %s: %s -> %s (ratio %s)",
            max_payout_amount,
            coverage_amount,
            raw_premium,
            adjusted,
            ratio,
        )
        return PayoutLimitResult(
            adjusted_premium=adjusted,
            applied_limit=max_payout_amount,
            was_applied=True,
        )
