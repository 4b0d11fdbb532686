"""
Signing payload construction.

Signatures cover ``sha256(network_id || ENVELOPE_TYPE_TX || xdr(tx))``, never
the transaction bytes alone, which binds each signature to one network.
"""

from __future__ import annotations

from ..codec.hashes import sha256_bytes
from ..network import network_id
from ..runtime.errors import SignatureError
from ..xdr import types as xdr


def signature_base(tx: xdr.Transaction, net_id: bytes) -> bytes:
    """
    The unhashed signature base of a transaction.

    Args:
        tx: Transaction record
        net_id: 32-byte network id
    """
    if len(net_id) != 32:
        raise SignatureError(f"network id must be 32 bytes, got {len(net_id)}")
    return xdr.TransactionSignaturePayload(net_id, tx).to_xdr_bytes()


def signing_payload(tx: xdr.Transaction, net_id: bytes) -> bytes:
    """
    The 32-byte hash every signer signs.

    Args:
        tx: Transaction record
        net_id: 32-byte network id (see ``network_id``)
    """
    return sha256_bytes(signature_base(tx, net_id))


def signing_payload_for_passphrase(tx: xdr.Transaction, network_passphrase: str) -> bytes:
    return signing_payload(tx, network_id(network_passphrase))
