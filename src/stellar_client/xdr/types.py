"""
XDR records of the network's transaction grammar.

Each record packs itself into an XdrWriter and unpacks from an XdrReader.
Field layout, discriminant values and bounds follow the network's published
``Stellar-transaction.x`` / ``Stellar-types.x`` / ``Stellar-ledger-entries.x``
schema. Only the subset used by the transaction engine is modelled.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Type, TypeVar, Union

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import MarshalError, UnmarshalError

R = TypeVar("R", bound="XdrRecord")

MAX_OPS_PER_TX = 100
MAX_SIGNATURES = 20
MAX_EXTRA_SIGNERS = 2
MEMO_TEXT_MAX = 28
DATA_NAME_MAX = 64
DATA_VALUE_MAX = 64
SIGNATURE_MAX = 64


class CryptoKeyType(IntEnum):
    KEY_TYPE_ED25519 = 0
    KEY_TYPE_PRE_AUTH_TX = 1
    KEY_TYPE_HASH_X = 2
    KEY_TYPE_ED25519_SIGNED_PAYLOAD = 3
    KEY_TYPE_MUXED_ED25519 = 0x100


class PublicKeyType(IntEnum):
    PUBLIC_KEY_TYPE_ED25519 = 0


class SignerKeyType(IntEnum):
    SIGNER_KEY_TYPE_ED25519 = 0
    SIGNER_KEY_TYPE_PRE_AUTH_TX = 1
    SIGNER_KEY_TYPE_HASH_X = 2


class AssetType(IntEnum):
    ASSET_TYPE_NATIVE = 0
    ASSET_TYPE_CREDIT_ALPHANUM4 = 1
    ASSET_TYPE_CREDIT_ALPHANUM12 = 2
    ASSET_TYPE_POOL_SHARE = 3


class MemoType(IntEnum):
    MEMO_NONE = 0
    MEMO_TEXT = 1
    MEMO_ID = 2
    MEMO_HASH = 3
    MEMO_RETURN = 4


class PreconditionType(IntEnum):
    PRECOND_NONE = 0
    PRECOND_TIME = 1
    PRECOND_V2 = 2


class OperationType(IntEnum):
    CREATE_ACCOUNT = 0
    PAYMENT = 1
    PATH_PAYMENT_STRICT_RECEIVE = 2
    MANAGE_SELL_OFFER = 3
    CREATE_PASSIVE_SELL_OFFER = 4
    SET_OPTIONS = 5
    CHANGE_TRUST = 6
    ALLOW_TRUST = 7
    ACCOUNT_MERGE = 8
    INFLATION = 9
    MANAGE_DATA = 10
    BUMP_SEQUENCE = 11


class EnvelopeType(IntEnum):
    ENVELOPE_TYPE_TX_V0 = 0
    ENVELOPE_TYPE_SCP = 1
    ENVELOPE_TYPE_TX = 2
    ENVELOPE_TYPE_AUTH = 3
    ENVELOPE_TYPE_SCPVALUE = 4
    ENVELOPE_TYPE_TX_FEE_BUMP = 5
    ENVELOPE_TYPE_OP_ID = 6
    ENVELOPE_TYPE_POOL_REVOKE_OP_ID = 7


class LiquidityPoolType(IntEnum):
    LIQUIDITY_POOL_CONSTANT_PRODUCT = 0


def _enum(enum_cls, value: int, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise UnmarshalError(f"Unknown {what} discriminant: {value}")


class XdrRecord:
    """Mixin giving every record byte and base64 round-trips."""

    def pack(self, w: XdrWriter) -> None:
        raise NotImplementedError

    @classmethod
    def unpack(cls: Type[R], r: XdrReader) -> R:
        raise NotImplementedError

    def to_xdr_bytes(self) -> bytes:
        w = XdrWriter()
        self.pack(w)
        return w.to_bytes()

    @classmethod
    def from_xdr_bytes(cls: Type[R], data: bytes) -> R:
        r = XdrReader(data)
        record = cls.unpack(r)
        r.expect_eof()
        return record

    def to_xdr_base64(self) -> str:
        return base64.b64encode(self.to_xdr_bytes()).decode("ascii")

    @classmethod
    def from_xdr_base64(cls: Type[R], text: str) -> R:
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise UnmarshalError("Invalid base64 XDR", cause=e)
        return cls.from_xdr_bytes(data)


# Keys and accounts

@dataclass(frozen=True)
class PublicKey(XdrRecord):
    """AccountID: an Ed25519 public key."""

    ed25519: bytes

    def pack(self, w: XdrWriter) -> None:
        w.i32(PublicKeyType.PUBLIC_KEY_TYPE_ED25519)
        w.opaque_fixed(self.ed25519, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> PublicKey:
        _enum(PublicKeyType, r.i32(), "PublicKeyType")
        return cls(r.opaque_fixed(32))


AccountID = PublicKey


@dataclass(frozen=True)
class MuxedAccount(XdrRecord):
    """
    Account reference that may carry a 64-bit sub-account id.

    ``id is None`` selects the plain KEY_TYPE_ED25519 arm.
    """

    ed25519: bytes
    id: Optional[int] = None

    @property
    def type(self) -> CryptoKeyType:
        if self.id is None:
            return CryptoKeyType.KEY_TYPE_ED25519
        return CryptoKeyType.KEY_TYPE_MUXED_ED25519

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.id is not None:
            w.u64(self.id)
        w.opaque_fixed(self.ed25519, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> MuxedAccount:
        kind = r.i32()
        if kind == CryptoKeyType.KEY_TYPE_ED25519:
            return cls(r.opaque_fixed(32))
        if kind == CryptoKeyType.KEY_TYPE_MUXED_ED25519:
            mux_id = r.u64()
            return cls(r.opaque_fixed(32), mux_id)
        raise UnmarshalError(f"Unknown MuxedAccount discriminant: {kind}")


@dataclass(frozen=True)
class SignerKey(XdrRecord):
    type: SignerKeyType
    key: bytes

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        w.opaque_fixed(self.key, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> SignerKey:
        kind = _enum(SignerKeyType, r.i32(), "SignerKeyType")
        return cls(kind, r.opaque_fixed(32))


# Assets

@dataclass(frozen=True)
class Asset(XdrRecord):
    type: AssetType
    code: bytes = b""
    issuer: Optional[PublicKey] = None

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.type == AssetType.ASSET_TYPE_NATIVE:
            return
        if self.type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
            w.opaque_fixed(self.code, 4)
        elif self.type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM12:
            w.opaque_fixed(self.code, 12)
        else:
            raise MarshalError(f"Asset type {self.type!r} cannot be encoded as Asset")
        if self.issuer is None:
            raise MarshalError("Credit asset requires an issuer")
        self.issuer.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> Asset:
        kind = _enum(AssetType, r.i32(), "AssetType")
        if kind == AssetType.ASSET_TYPE_NATIVE:
            return cls(kind)
        if kind == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
            code = r.opaque_fixed(4)
        elif kind == AssetType.ASSET_TYPE_CREDIT_ALPHANUM12:
            code = r.opaque_fixed(12)
        else:
            raise UnmarshalError(f"Asset type {kind!r} is not valid here")
        return cls(kind, code, PublicKey.unpack(r))


# Memo

@dataclass(frozen=True)
class Memo(XdrRecord):
    type: MemoType = MemoType.MEMO_NONE
    value: Union[None, bytes, int] = None

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.type == MemoType.MEMO_NONE:
            return
        if self.type == MemoType.MEMO_TEXT:
            w.string(self.value, MEMO_TEXT_MAX)
        elif self.type == MemoType.MEMO_ID:
            w.u64(self.value)
        else:
            w.opaque_fixed(self.value, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> Memo:
        kind = _enum(MemoType, r.i32(), "MemoType")
        if kind == MemoType.MEMO_NONE:
            return cls()
        if kind == MemoType.MEMO_TEXT:
            return cls(kind, r.string(MEMO_TEXT_MAX))
        if kind == MemoType.MEMO_ID:
            return cls(kind, r.u64())
        return cls(kind, r.opaque_fixed(32))


# Preconditions

@dataclass(frozen=True)
class TimeBounds(XdrRecord):
    min_time: int
    max_time: int

    def pack(self, w: XdrWriter) -> None:
        w.u64(self.min_time)
        w.u64(self.max_time)

    @classmethod
    def unpack(cls, r: XdrReader) -> TimeBounds:
        return cls(r.u64(), r.u64())


@dataclass(frozen=True)
class LedgerBounds(XdrRecord):
    min_ledger: int
    max_ledger: int

    def pack(self, w: XdrWriter) -> None:
        w.u32(self.min_ledger)
        w.u32(self.max_ledger)

    @classmethod
    def unpack(cls, r: XdrReader) -> LedgerBounds:
        return cls(r.u32(), r.u32())


def _pack_optional(w: XdrWriter, value, pack) -> None:
    w.boolean(value is not None)
    if value is not None:
        pack(value)


def _unpack_optional(r: XdrReader, unpack):
    return unpack() if r.boolean() else None


@dataclass(frozen=True)
class PreconditionsV2(XdrRecord):
    time_bounds: Optional[TimeBounds] = None
    ledger_bounds: Optional[LedgerBounds] = None
    min_seq_num: Optional[int] = None
    min_seq_age: int = 0
    min_seq_ledger_gap: int = 0
    extra_signers: Tuple[SignerKey, ...] = ()

    def pack(self, w: XdrWriter) -> None:
        _pack_optional(w, self.time_bounds, lambda v: v.pack(w))
        _pack_optional(w, self.ledger_bounds, lambda v: v.pack(w))
        _pack_optional(w, self.min_seq_num, w.i64)
        w.u64(self.min_seq_age)
        w.u32(self.min_seq_ledger_gap)
        w.array_length(len(self.extra_signers), MAX_EXTRA_SIGNERS)
        for signer in self.extra_signers:
            signer.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> PreconditionsV2:
        time_bounds = _unpack_optional(r, lambda: TimeBounds.unpack(r))
        ledger_bounds = _unpack_optional(r, lambda: LedgerBounds.unpack(r))
        min_seq_num = _unpack_optional(r, r.i64)
        min_seq_age = r.u64()
        min_seq_ledger_gap = r.u32()
        count = r.array_length(MAX_EXTRA_SIGNERS)
        extra_signers = tuple(SignerKey.unpack(r) for _ in range(count))
        return cls(time_bounds, ledger_bounds, min_seq_num, min_seq_age,
                   min_seq_ledger_gap, extra_signers)


@dataclass(frozen=True)
class Preconditions(XdrRecord):
    type: PreconditionType = PreconditionType.PRECOND_NONE
    time_bounds: Optional[TimeBounds] = None
    v2: Optional[PreconditionsV2] = None

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.type == PreconditionType.PRECOND_TIME:
            self.time_bounds.pack(w)
        elif self.type == PreconditionType.PRECOND_V2:
            self.v2.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> Preconditions:
        kind = _enum(PreconditionType, r.i32(), "PreconditionType")
        if kind == PreconditionType.PRECOND_TIME:
            return cls(kind, time_bounds=TimeBounds.unpack(r))
        if kind == PreconditionType.PRECOND_V2:
            return cls(kind, v2=PreconditionsV2.unpack(r))
        return cls()


# Operations

@dataclass(frozen=True)
class CreateAccountOp(XdrRecord):
    destination: PublicKey
    starting_balance: int

    def pack(self, w: XdrWriter) -> None:
        self.destination.pack(w)
        w.i64(self.starting_balance)

    @classmethod
    def unpack(cls, r: XdrReader) -> CreateAccountOp:
        return cls(PublicKey.unpack(r), r.i64())


@dataclass(frozen=True)
class PaymentOp(XdrRecord):
    destination: MuxedAccount
    asset: Asset
    amount: int

    def pack(self, w: XdrWriter) -> None:
        self.destination.pack(w)
        self.asset.pack(w)
        w.i64(self.amount)

    @classmethod
    def unpack(cls, r: XdrReader) -> PaymentOp:
        return cls(MuxedAccount.unpack(r), Asset.unpack(r), r.i64())


@dataclass(frozen=True)
class ManageDataOp(XdrRecord):
    data_name: bytes
    data_value: Optional[bytes] = None

    def pack(self, w: XdrWriter) -> None:
        w.string(self.data_name, DATA_NAME_MAX)
        _pack_optional(w, self.data_value, lambda v: w.opaque_var(v, DATA_VALUE_MAX))

    @classmethod
    def unpack(cls, r: XdrReader) -> ManageDataOp:
        name = r.string(DATA_NAME_MAX)
        return cls(name, _unpack_optional(r, lambda: r.opaque_var(DATA_VALUE_MAX)))


@dataclass(frozen=True)
class BumpSequenceOp(XdrRecord):
    bump_to: int

    def pack(self, w: XdrWriter) -> None:
        w.i64(self.bump_to)

    @classmethod
    def unpack(cls, r: XdrReader) -> BumpSequenceOp:
        return cls(r.i64())


# Account merge's body is the destination MuxedAccount itself.
OPERATION_BODIES = {
    OperationType.CREATE_ACCOUNT: CreateAccountOp,
    OperationType.PAYMENT: PaymentOp,
    OperationType.ACCOUNT_MERGE: MuxedAccount,
    OperationType.MANAGE_DATA: ManageDataOp,
    OperationType.BUMP_SEQUENCE: BumpSequenceOp,
}

OperationBody = Union[CreateAccountOp, PaymentOp, MuxedAccount, ManageDataOp, BumpSequenceOp]


@dataclass(frozen=True)
class Operation(XdrRecord):
    """One tagged operation plus its optional source override."""

    type: OperationType
    body: OperationBody
    source_account: Optional[MuxedAccount] = None

    def pack(self, w: XdrWriter) -> None:
        _pack_optional(w, self.source_account, lambda v: v.pack(w))
        if self.type not in OPERATION_BODIES:
            raise MarshalError(f"Unsupported operation type: {self.type!r}")
        w.i32(self.type)
        self.body.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> Operation:
        source = _unpack_optional(r, lambda: MuxedAccount.unpack(r))
        kind = _enum(OperationType, r.i32(), "OperationType")
        body_cls = OPERATION_BODIES.get(kind)
        if body_cls is None:
            raise UnmarshalError(f"Unsupported operation type: {kind.name}")
        return cls(kind, body_cls.unpack(r), source)


# Transactions and envelopes

@dataclass(frozen=True)
class Transaction(XdrRecord):
    source_account: MuxedAccount
    fee: int
    seq_num: int
    cond: Preconditions
    memo: Memo
    operations: Tuple[Operation, ...]
    ext: int = 0

    def pack(self, w: XdrWriter) -> None:
        self.source_account.pack(w)
        w.u32(self.fee)
        w.i64(self.seq_num)
        self.cond.pack(w)
        self.memo.pack(w)
        w.array_length(len(self.operations), MAX_OPS_PER_TX)
        for op in self.operations:
            op.pack(w)
        w.i32(self.ext)

    @classmethod
    def unpack(cls, r: XdrReader) -> Transaction:
        source = MuxedAccount.unpack(r)
        fee = r.u32()
        seq_num = r.i64()
        cond = Preconditions.unpack(r)
        memo = Memo.unpack(r)
        count = r.array_length(MAX_OPS_PER_TX)
        operations = tuple(Operation.unpack(r) for _ in range(count))
        ext = r.i32()
        if ext != 0:
            raise UnmarshalError(f"Unsupported TransactionExt version: {ext}")
        return cls(source, fee, seq_num, cond, memo, operations, ext)


@dataclass(frozen=True)
class DecoratedSignature(XdrRecord):
    hint: bytes
    signature: bytes

    def pack(self, w: XdrWriter) -> None:
        w.opaque_fixed(self.hint, 4)
        w.opaque_var(self.signature, SIGNATURE_MAX)

    @classmethod
    def unpack(cls, r: XdrReader) -> DecoratedSignature:
        return cls(r.opaque_fixed(4), r.opaque_var(SIGNATURE_MAX))


@dataclass(frozen=True)
class TransactionV1Envelope(XdrRecord):
    tx: Transaction
    signatures: Tuple[DecoratedSignature, ...] = ()

    def pack(self, w: XdrWriter) -> None:
        self.tx.pack(w)
        w.array_length(len(self.signatures), MAX_SIGNATURES)
        for sig in self.signatures:
            sig.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> TransactionV1Envelope:
        tx = Transaction.unpack(r)
        count = r.array_length(MAX_SIGNATURES)
        return cls(tx, tuple(DecoratedSignature.unpack(r) for _ in range(count)))


@dataclass(frozen=True)
class TransactionEnvelope(XdrRecord):
    """Envelope union; only the ENVELOPE_TYPE_TX arm is produced or accepted."""

    v1: TransactionV1Envelope
    type: EnvelopeType = EnvelopeType.ENVELOPE_TYPE_TX

    def pack(self, w: XdrWriter) -> None:
        if self.type != EnvelopeType.ENVELOPE_TYPE_TX:
            raise MarshalError(f"Unsupported envelope type: {self.type!r}")
        w.i32(self.type)
        self.v1.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> TransactionEnvelope:
        kind = _enum(EnvelopeType, r.i32(), "EnvelopeType")
        if kind != EnvelopeType.ENVELOPE_TYPE_TX:
            raise UnmarshalError(f"Unsupported envelope type: {kind.name}")
        return cls(TransactionV1Envelope.unpack(r), kind)


@dataclass(frozen=True)
class TransactionSignaturePayload(XdrRecord):
    """network_id || ENVELOPE_TYPE_TX || Transaction: the bytes whose hash is signed."""

    network_id: bytes
    tx: Transaction

    def pack(self, w: XdrWriter) -> None:
        w.opaque_fixed(self.network_id, 32)
        w.i32(EnvelopeType.ENVELOPE_TYPE_TX)
        self.tx.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> TransactionSignaturePayload:
        network_id = r.opaque_fixed(32)
        kind = _enum(EnvelopeType, r.i32(), "EnvelopeType")
        if kind != EnvelopeType.ENVELOPE_TYPE_TX:
            raise UnmarshalError(f"Unsupported tagged transaction type: {kind.name}")
        return cls(network_id, Transaction.unpack(r))


# Liquidity pools

@dataclass(frozen=True)
class LiquidityPoolConstantProductParameters(XdrRecord):
    asset_a: Asset
    asset_b: Asset
    fee: int

    def pack(self, w: XdrWriter) -> None:
        self.asset_a.pack(w)
        self.asset_b.pack(w)
        w.i32(self.fee)

    @classmethod
    def unpack(cls, r: XdrReader) -> LiquidityPoolConstantProductParameters:
        return cls(Asset.unpack(r), Asset.unpack(r), r.i32())


@dataclass(frozen=True)
class LiquidityPoolParameters(XdrRecord):
    constant_product: LiquidityPoolConstantProductParameters
    type: LiquidityPoolType = field(default=LiquidityPoolType.LIQUIDITY_POOL_CONSTANT_PRODUCT)

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        self.constant_product.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> LiquidityPoolParameters:
        kind = _enum(LiquidityPoolType, r.i32(), "LiquidityPoolType")
        return cls(LiquidityPoolConstantProductParameters.unpack(r), kind)
