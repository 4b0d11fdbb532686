"""
Liquidity pool identifier derivation.

A pool id is content addressed: the SHA-256 of the XDR pool type followed by
the XDR constant-product parameters (asset A, asset B, fee).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from ..codec.hashes import sha256_concat
from ..codec.writer import XdrWriter
from ..xdr import types as xdr
from ..runtime.errors import InvalidPoolFeeError, InvalidPoolTypeError, UnorderedAssetsError
from .asset import Asset

logger = logging.getLogger(__name__)

LIQUIDITY_POOL_FEE_V18 = 30
CONSTANT_PRODUCT = "constant_product"


@dataclass(frozen=True)
class ConstantProductParameters:
    """Constant-product pool parameters in domain form."""

    asset_a: Asset
    asset_b: Asset
    fee: int = LIQUIDITY_POOL_FEE_V18

    def to_xdr_object(self) -> xdr.LiquidityPoolConstantProductParameters:
        return xdr.LiquidityPoolConstantProductParameters(
            self.asset_a.to_xdr_object(), self.asset_b.to_xdr_object(), self.fee
        )


PoolParameters = Union[ConstantProductParameters, xdr.LiquidityPoolParameters,
                       xdr.LiquidityPoolConstantProductParameters]


def _as_constant_product(parameters: PoolParameters) -> ConstantProductParameters:
    if isinstance(parameters, ConstantProductParameters):
        return parameters
    if isinstance(parameters, xdr.LiquidityPoolParameters):
        parameters = parameters.constant_product
    return ConstantProductParameters(
        Asset.from_xdr_object(parameters.asset_a),
        Asset.from_xdr_object(parameters.asset_b),
        parameters.fee,
    )


def get_liquidity_pool_id(liquidity_pool_type: str, parameters: PoolParameters) -> bytes:
    """
    Compute the pool id for the given pool type and parameters.

    Checks, in order: pool type, fee, asset ordering.

    Args:
        liquidity_pool_type: Only "constant_product" is defined
        parameters: Assets and fee of the pool

    Returns:
        32-byte pool id

    Raises:
        InvalidPoolTypeError: Unknown pool type
        InvalidPoolFeeError: Fee differs from LIQUIDITY_POOL_FEE_V18
        UnorderedAssetsError: asset_a does not sort strictly before asset_b
    """
    if liquidity_pool_type != CONSTANT_PRODUCT:
        raise InvalidPoolTypeError(details={"liquidity_pool_type": liquidity_pool_type})

    params = _as_constant_product(parameters)
    if params.fee != LIQUIDITY_POOL_FEE_V18:
        raise InvalidPoolFeeError(details={"fee": params.fee})

    if Asset.compare(params.asset_a, params.asset_b) != -1:
        raise UnorderedAssetsError(
            details={"asset_a": str(params.asset_a), "asset_b": str(params.asset_b)}
        )

    w = XdrWriter()
    w.i32(xdr.LiquidityPoolType.LIQUIDITY_POOL_CONSTANT_PRODUCT)
    type_data = w.to_bytes()
    params_data = params.to_xdr_object().to_xdr_bytes()
    pool_id = sha256_concat(type_data, params_data)
    logger.debug(f"Derived liquidity pool id {pool_id.hex()} for {params.asset_a}/{params.asset_b}")
    return pool_id


__all__ = [
    "LIQUIDITY_POOL_FEE_V18",
    "CONSTANT_PRODUCT",
    "ConstantProductParameters",
    "get_liquidity_pool_id",
]
