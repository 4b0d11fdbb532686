"""
Transaction construction for the Stellar network.

Provides assets, memos, operation builders, validity bounds, fee arithmetic,
liquidity pool ids, the transaction builder and signed transactions.
"""

from . import operations
from .amounts import ONE, from_stroops, to_stroops
from .asset import Asset
from .builder import TIMEOUT_INFINITE, TransactionBuilder
from .fees import BASE_FEE, NetworkParams, check_fee, total_fee
from .liquidity_pool import (
    CONSTANT_PRODUCT,
    LIQUIDITY_POOL_FEE_V18,
    ConstantProductParameters,
    get_liquidity_pool_id,
)
from .memo import Memo
from .operations import account_merge, bump_sequence, create_account, manage_data, payment
from .preconditions import LedgerBounds, TimeBounds
from .signing import signature_base, signing_payload, signing_payload_for_passphrase
from .transaction import Transaction

__all__ = [
    "operations",
    "ONE",
    "from_stroops",
    "to_stroops",
    "Asset",
    "TIMEOUT_INFINITE",
    "TransactionBuilder",
    "BASE_FEE",
    "NetworkParams",
    "check_fee",
    "total_fee",
    "CONSTANT_PRODUCT",
    "LIQUIDITY_POOL_FEE_V18",
    "ConstantProductParameters",
    "get_liquidity_pool_id",
    "Memo",
    "account_merge",
    "bump_sequence",
    "create_account",
    "manage_data",
    "payment",
    "LedgerBounds",
    "TimeBounds",
    "signature_base",
    "signing_payload",
    "signing_payload_for_passphrase",
    "Transaction",
]
