"""
Transaction fee arithmetic.

The wire fee is the *total* fee of the transaction as a uint32 number of
stroops; by default it is the per-operation base fee times the operation
count.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..runtime.errors import BuilderError, FeeOverflowError

BASE_FEE = 100
UINT32_MAX = 0xFFFFFFFF


@dataclass
class NetworkParams:
    """Network parameters for fee calculation and transaction limits."""

    base_fee: int = BASE_FEE
    max_fee: int = UINT32_MAX
    max_operations: int = 100


def total_fee(base_fee: int, operation_count: int, params: NetworkParams = None) -> int:
    """
    Total fee for a transaction.

    Args:
        base_fee: Fee per operation in stroops
        operation_count: Number of operations
        params: Network parameters (uses defaults if None)

    Returns:
        base_fee * operation_count

    Raises:
        FeeOverflowError: If the product does not fit the wire fee field
    """
    if params is None:
        params = NetworkParams()
    check_fee(base_fee, params, "base fee")
    fee = base_fee * operation_count
    if fee > params.max_fee:
        raise FeeOverflowError(
            f"Fee {base_fee} x {operation_count} operations overflows uint32",
            details={"base_fee": base_fee, "operations": operation_count},
        )
    return fee


def check_fee(fee: int, params: NetworkParams = None, what: str = "fee") -> int:
    """
    Validate a fee value against the wire representation.

    Raises:
        BuilderError: If the fee is not a non-negative integer
        FeeOverflowError: If it exceeds the maximum fee
    """
    if params is None:
        params = NetworkParams()
    if isinstance(fee, bool) or not isinstance(fee, int) or fee < 0:
        raise BuilderError(f"{what} must be a non-negative integer, got {fee!r}")
    if fee > params.max_fee:
        raise FeeOverflowError(f"{what} {fee} overflows uint32")
    return fee
