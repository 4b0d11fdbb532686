"""
Built transactions: signing and envelope production.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import List, Optional, Tuple, Union

from ..crypto.ed25519 import Ed25519KeyPair, Ed25519PublicKey
from ..network import network_id
from ..runtime import strkey
from ..runtime.address import Address
from ..runtime.errors import MarshalError, SignatureError
from ..xdr import types as xdr
from .memo import Memo
from .preconditions import LedgerBounds, TimeBounds
from .signing import signature_base, signing_payload

logger = logging.getLogger(__name__)


def _signer_key_to_string(key: xdr.SignerKey) -> str:
    if key.type == xdr.SignerKeyType.SIGNER_KEY_TYPE_ED25519:
        return strkey.encode_ed25519_public_key(key.key)
    if key.type == xdr.SignerKeyType.SIGNER_KEY_TYPE_PRE_AUTH_TX:
        return strkey.encode_pre_auth_tx(key.key)
    return strkey.encode_sha256_hash(key.key)


class Transaction:
    """
    An unsigned transaction plus the signatures accumulated so far.

    The wire record is immutable; only the signature list grows. Signatures
    are appended in the order they are produced, without deduplication.
    """

    def __init__(self, tx: xdr.Transaction, network_passphrase: str,
                 signatures: Optional[List[xdr.DecoratedSignature]] = None):
        """
        Args:
            tx: Transaction wire record
            network_passphrase: Passphrase of the network the transaction targets
            signatures: Already attached decorated signatures
        """
        self._tx = tx
        self.network_passphrase = network_passphrase
        self.signatures: List[xdr.DecoratedSignature] = list(signatures or [])

    # Fields

    @property
    def source(self) -> str:
        return Address.from_muxed_account(self._tx.source_account).to_string()

    @property
    def fee(self) -> int:
        return self._tx.fee

    @property
    def sequence(self) -> str:
        return str(self._tx.seq_num)

    @property
    def memo(self) -> Memo:
        return Memo.from_xdr_object(self._tx.memo)

    @property
    def operations(self) -> Tuple[xdr.Operation, ...]:
        return self._tx.operations

    @property
    def time_bounds(self) -> Optional[TimeBounds]:
        cond = self._tx.cond
        if cond.type == xdr.PreconditionType.PRECOND_TIME:
            return TimeBounds.from_xdr_object(cond.time_bounds)
        if cond.type == xdr.PreconditionType.PRECOND_V2 and cond.v2.time_bounds is not None:
            return TimeBounds.from_xdr_object(cond.v2.time_bounds)
        return None

    @property
    def ledger_bounds(self) -> Optional[LedgerBounds]:
        v2 = self._tx.cond.v2
        if v2 is None or v2.ledger_bounds is None:
            return None
        return LedgerBounds.from_xdr_object(v2.ledger_bounds)

    @property
    def min_account_sequence(self) -> Optional[str]:
        v2 = self._tx.cond.v2
        if v2 is None or v2.min_seq_num is None:
            return None
        return str(v2.min_seq_num)

    @property
    def min_account_sequence_age(self) -> int:
        v2 = self._tx.cond.v2
        return 0 if v2 is None else v2.min_seq_age

    @property
    def min_account_sequence_ledger_gap(self) -> int:
        v2 = self._tx.cond.v2
        return 0 if v2 is None else v2.min_seq_ledger_gap

    @property
    def extra_signers(self) -> List[str]:
        v2 = self._tx.cond.v2
        if v2 is None:
            return []
        return [_signer_key_to_string(key) for key in v2.extra_signers]

    def to_xdr_object(self) -> xdr.Transaction:
        return self._tx

    # Signing

    def network_id(self) -> bytes:
        return network_id(self.network_passphrase)

    def signature_base(self) -> bytes:
        """The unhashed bytes covered by signatures."""
        return signature_base(self._tx, self.network_id())

    def hash(self) -> bytes:
        """Signing payload: the 32-byte hash every signer signs."""
        return signing_payload(self._tx, self.network_id())

    def hash_hex(self) -> str:
        return self.hash().hex()

    def sign(self, *signers: Ed25519KeyPair) -> None:
        """
        Sign with each key pair, in order, appending one decorated signature each.

        Signing twice with the same key pair appends a second signature.

        Nothing is attached unless every key pair signs.

        Raises:
            SignatureError: If a key pair holds no secret seed
        """
        payload = self.hash()
        produced = [signer.sign_decorated(payload) for signer in signers]
        self.signatures.extend(produced)
        for decorated in produced:
            logger.debug(f"Signed transaction {payload.hex()[:16]}... with hint {decorated.hint.hex()}")

    def add_decorated_signature(self, signature: xdr.DecoratedSignature) -> None:
        """Attach an externally produced decorated signature as-is."""
        self.signatures.append(signature)

    def add_signature(self, public_key: str, signature: Union[str, bytes]) -> None:
        """
        Attach a signature produced elsewhere, after verifying it.

        Args:
            public_key: G... address of the signer
            signature: Raw signature bytes or their base64 encoding

        Raises:
            SignatureError: If the signature does not verify for this transaction
        """
        if isinstance(signature, str):
            try:
                signature = base64.b64decode(signature, validate=True)
            except (binascii.Error, ValueError) as e:
                raise SignatureError("Signature must be base64 encoded", cause=e)
        key = Ed25519PublicKey.from_address(public_key)
        if not key.verify(signature, self.hash()):
            raise SignatureError("Invalid signature", details={"public_key": public_key})
        self.signatures.append(xdr.DecoratedSignature(key.signature_hint(), signature))

    # Envelope

    def to_envelope(self) -> xdr.TransactionEnvelope:
        """
        Wrap the transaction and its signatures in a v1 envelope.

        Raises:
            MarshalError: If more than 20 signatures are attached
        """
        if len(self.signatures) > xdr.MAX_SIGNATURES:
            raise MarshalError(f"Envelope holds at most {xdr.MAX_SIGNATURES} signatures, got {len(self.signatures)}")
        return xdr.TransactionEnvelope(xdr.TransactionV1Envelope(self._tx, tuple(self.signatures)))

    def to_xdr(self) -> str:
        """Base64 of the envelope, ready for submission."""
        return self.to_envelope().to_xdr_base64()

    @classmethod
    def from_xdr(cls, envelope_xdr: str, network_passphrase: str) -> Transaction:
        """
        Decode a base64 envelope.

        Raises:
            CodecError: If the envelope is malformed or of an unsupported type
        """
        envelope = xdr.TransactionEnvelope.from_xdr_base64(envelope_xdr)
        return cls(envelope.v1.tx, network_passphrase, list(envelope.v1.signatures))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return (self._tx == other._tx
                and self.network_passphrase == other.network_passphrase
                and self.signatures == other.signatures)

    def __repr__(self) -> str:
        return (f"Transaction(source='{self.source}', sequence='{self.sequence}', "
                f"fee={self.fee}, operations={len(self.operations)}, signatures={len(self.signatures)})")
