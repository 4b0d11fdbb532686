"""
Amount conversion between decimal units and stroops.

One unit is 10^7 stroops; on the wire every amount is an int64 count of
stroops.
"""

from __future__ import annotations

from decimal import Decimal, Inexact, InvalidOperation, Overflow, localcontext
from typing import Union

from ..runtime.errors import ErrorCode, OperationError

ONE = 10_000_000
MAX_INT64 = 2 ** 63 - 1

AmountLike = Union[str, int, Decimal]


def to_stroops(amount: AmountLike, allow_zero: bool = False) -> int:
    """
    Convert a decimal amount in units to stroops.

    Args:
        amount: Decimal string, int or Decimal (floats are rejected)
        allow_zero: Accept 0 as well as positive amounts

    Returns:
        Amount in stroops

    Raises:
        OperationError: If the amount is not a number, is non-positive, has
            more than 7 fractional digits or exceeds int64 stroops
    """
    if isinstance(amount, (bool, float)) or not isinstance(amount, (str, int, Decimal)):
        raise OperationError(
            f"amount must be a decimal string, int or Decimal, got {type(amount).__name__}",
            code=ErrorCode.INVALID_AMOUNT,
        )
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise OperationError(f"invalid amount: {amount!r}", code=ErrorCode.INVALID_AMOUNT, cause=e)
    if not value.is_finite():
        raise OperationError(f"invalid amount: {amount!r}", code=ErrorCode.INVALID_AMOUNT)

    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + 8
        ctx.traps[Inexact] = True
        try:
            stroops = value * ONE
        except Overflow as e:
            raise OperationError(f"amount {amount!r} exceeds int64 stroops", code=ErrorCode.INVALID_AMOUNT, cause=e)
        except Inexact as e:
            raise OperationError(
                f"amount {amount!r} has more than 7 fractional digits",
                code=ErrorCode.INVALID_AMOUNT,
                cause=e,
            )
    if stroops != stroops.to_integral_value():
        raise OperationError(
            f"amount {amount!r} has more than 7 fractional digits",
            code=ErrorCode.INVALID_AMOUNT,
        )
    stroops = int(stroops)
    if stroops < 0 or (stroops == 0 and not allow_zero):
        raise OperationError(f"amount must be positive, got {amount!r}", code=ErrorCode.INVALID_AMOUNT)
    if stroops > MAX_INT64:
        raise OperationError(f"amount {amount!r} exceeds int64 stroops", code=ErrorCode.INVALID_AMOUNT)
    return stroops


def from_stroops(stroops: int) -> str:
    """Render a stroop count as a 7-decimal unit string."""
    return f"{Decimal(stroops) / ONE:.7f}"


def check_stroops(value: int, what: str = "amount") -> int:
    """Validate a non-negative integer that is already expressed in stroops."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise OperationError(f"{what} must be an integer number of stroops", code=ErrorCode.INVALID_AMOUNT)
    if value < 0:
        raise OperationError(f"{what} must not be negative, got {value}", code=ErrorCode.INVALID_AMOUNT)
    if value > MAX_INT64:
        raise OperationError(f"{what} exceeds int64 stroops: {value}", code=ErrorCode.INVALID_AMOUNT)
    return value
