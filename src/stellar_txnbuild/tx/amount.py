"""
Amount and price parsing.

Amounts travel on the wire as int64 counts of stroops, one ten-millionth
of a unit, so ``"10"`` becomes ``100000000``. Prices are exact fractions
with int32 numerator and denominator.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

from ..codec.xdr import Price
from ..runtime.errors import ValidationError, ErrorCode

STROOPS_PER_UNIT = 10_000_000
AMOUNT_DECIMALS = 7
MAX_INT32 = 2**31 - 1
MAX_UINT32 = 2**32 - 1
MAX_INT64 = 2**63 - 1
MAX_UINT64 = 2**64 - 1

AmountLike = Union[str, int, Decimal]
PriceLike = Union[str, int, Decimal, Fraction, Price]


def _to_decimal(value, what: str) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError(f"{what} must be a string, int or Decimal, got {type(value).__name__}",
                              ErrorCode.INVALID_AMOUNT)
    try:
        d = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"invalid {what} {value!r}", ErrorCode.INVALID_AMOUNT, cause=e) from e
    if not d.is_finite():
        raise ValidationError(f"invalid {what} {value!r}", ErrorCode.INVALID_AMOUNT)
    return d


def parse_amount(value: AmountLike) -> int:
    """
    Convert a decimal amount to stroops.

    Args:
        value: Amount such as ``"10"`` or ``"0.0000001"``

    Returns:
        Amount in stroops

    Raises:
        ValidationError: If negative, more precise than 7 decimals or out of int64 range
    """
    d = _to_decimal(value, "amount")
    if d < 0:
        raise ValidationError(f"amount {value!r} cannot be negative", ErrorCode.INVALID_AMOUNT)
    scaled = d * STROOPS_PER_UNIT
    if scaled != scaled.to_integral_value():
        raise ValidationError(f"amount {value!r} has more than {AMOUNT_DECIMALS} decimal places",
                              ErrorCode.INVALID_AMOUNT)
    stroops = int(scaled)
    if stroops > MAX_INT64:
        raise ValidationError(f"amount {value!r} exceeds int64 range", ErrorCode.INVALID_AMOUNT)
    return stroops


def format_amount(stroops: int) -> str:
    """Render stroops as a decimal string with 7 places, e.g. ``"10.0000000"``."""
    sign = "-" if stroops < 0 else ""
    whole, frac = divmod(abs(stroops), STROOPS_PER_UNIT)
    return f"{sign}{whole}.{frac:07d}"


def parse_price(value: PriceLike) -> Price:
    """
    Convert a decimal price to a reduced fraction.

    ``"0.01"`` becomes ``1/100``. Values without an exact int32 fraction
    use the closest fraction whose denominator fits.

    Raises:
        ValidationError: If the price is not positive or cannot be represented
    """
    if isinstance(value, Price):
        frac = Fraction(value.n, value.d) if value.d else None
        if frac is None:
            raise ValidationError("price denominator cannot be zero", ErrorCode.INVALID_AMOUNT)
    elif isinstance(value, Fraction):
        frac = value
    else:
        frac = Fraction(_to_decimal(value, "price"))
    if frac <= 0:
        raise ValidationError(f"price {value!r} must be positive", ErrorCode.INVALID_AMOUNT)
    if frac.denominator > MAX_INT32:
        frac = frac.limit_denominator(MAX_INT32)
    if frac.numerator > MAX_INT32 or frac.numerator == 0:
        raise ValidationError(f"price {value!r} cannot be represented as an int32 fraction",
                              ErrorCode.INVALID_AMOUNT)
    return Price(frac.numerator, frac.denominator)


__all__ = [
    "STROOPS_PER_UNIT",
    "parse_amount",
    "format_amount",
    "parse_price",
]
