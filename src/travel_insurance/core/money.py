"""Decimal helpers shared by pricing and discount code."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from beartype import beartype

CENT: Final = Decimal("0.01")
RATIO_PRECISION: Final = Decimal("0.0000000001")
ZERO: Final = Decimal("0")
ONE: Final = Decimal("1")
HUNDRED: Final = Decimal("100")


@beartype
def round_money(amount: Decimal) -> Decimal:
    """Round to cents using round-half-up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@beartype
def percentage_of(amount: Decimal, percentage: Decimal) -> Decimal:
    """Return ``percentage`` percent of ``amount`` rounded to cents."""
    return round_money(amount * percentage / HUNDRED)
