"""
XDR wire records.

Usually imported as a namespace (``from stellar_client import xdr``) so that
wire records such as ``xdr.Asset`` stay distinct from the domain classes of
the same name.
"""

from .types import (
    MAX_OPS_PER_TX,
    MAX_SIGNATURES,
    MAX_EXTRA_SIGNERS,
    MEMO_TEXT_MAX,
    DATA_NAME_MAX,
    DATA_VALUE_MAX,
    CryptoKeyType,
    PublicKeyType,
    SignerKeyType,
    AssetType,
    MemoType,
    PreconditionType,
    OperationType,
    EnvelopeType,
    LiquidityPoolType,
    XdrRecord,
    PublicKey,
    AccountID,
    MuxedAccount,
    SignerKey,
    Asset,
    Memo,
    TimeBounds,
    LedgerBounds,
    PreconditionsV2,
    Preconditions,
    CreateAccountOp,
    PaymentOp,
    ManageDataOp,
    BumpSequenceOp,
    OperationBody,
    Operation,
    Transaction,
    DecoratedSignature,
    TransactionV1Envelope,
    TransactionEnvelope,
    TransactionSignaturePayload,
    LiquidityPoolConstantProductParameters,
    LiquidityPoolParameters,
)

__all__ = [
    "MAX_OPS_PER_TX",
    "MAX_SIGNATURES",
    "MAX_EXTRA_SIGNERS",
    "MEMO_TEXT_MAX",
    "DATA_NAME_MAX",
    "DATA_VALUE_MAX",
    "CryptoKeyType",
    "PublicKeyType",
    "SignerKeyType",
    "AssetType",
    "MemoType",
    "PreconditionType",
    "OperationType",
    "EnvelopeType",
    "LiquidityPoolType",
    "XdrRecord",
    "PublicKey",
    "AccountID",
    "MuxedAccount",
    "SignerKey",
    "Asset",
    "Memo",
    "TimeBounds",
    "LedgerBounds",
    "PreconditionsV2",
    "Preconditions",
    "CreateAccountOp",
    "PaymentOp",
    "ManageDataOp",
    "BumpSequenceOp",
    "OperationBody",
    "Operation",
    "Transaction",
    "DecoratedSignature",
    "TransactionV1Envelope",
    "TransactionEnvelope",
    "TransactionSignaturePayload",
    "LiquidityPoolConstantProductParameters",
    "LiquidityPoolParameters",
]
