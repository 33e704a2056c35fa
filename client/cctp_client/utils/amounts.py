from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Union

from cctp_client.errors import InvalidInputError

USDC_DECIMALS = 6

AmountLike = Union[str, int, float, Decimal]


def to_decimal(amount: AmountLike) -> Decimal:
    # floats go through str() so 0.1 stays 0.1 and not its binary expansion
    if isinstance(amount, bool):
        raise InvalidInputError(f"Expected a decimal amount, got {amount!r}")
    if isinstance(amount, float):
        amount = str(amount)
    elif isinstance(amount, str):
        amount = amount.strip()
    try:
        num = Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"Amount is not a decimal number: {amount!r}")
    if not num.is_finite():
        raise InvalidInputError(f"Amount must be finite, got {amount!r}")
    return num


def to_base_units(amount: AmountLike, decimals: int = USDC_DECIMALS) -> int:
    """Convert a human amount (e.g. "50" USDC) into integer base units.

    Rounds half to even at the last base unit, so "0.0000005" -> 0 and
    "0.0000015" -> 2. The whole computation stays in Decimal, never float.

    Raises:
        InvalidInputError: the amount is not numeric, not finite or negative.
    """
    num = to_decimal(amount)
    if num < 0:
        raise InvalidInputError(f"Amount must not be negative, got {amount!r}")
    scaled = num.scaleb(decimals)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))


def from_base_units(raw: int, decimals: int = USDC_DECIMALS) -> Decimal:
    return Decimal(raw).scaleb(-decimals)
