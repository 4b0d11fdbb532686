"""
Stellar Python Client - transaction engine

Builds, signs and serializes Stellar transactions offline: strkey addresses,
XDR records, operations, liquidity pool ids and signed envelopes.
"""

from . import xdr
from .account import Account
from .crypto import Ed25519KeyPair, Ed25519PublicKey, Keypair, verify_ed25519
from .network import Network, Networks, network_id
from .runtime import strkey
from .runtime.address import (
    Address,
    decode_account_id,
    decode_address_to_muxed_account,
    encode_muxed_account,
    encode_muxed_account_to_address,
    extract_base_address,
)
from .runtime.errors import *  # noqa: F401,F403
from .runtime.errors import __all__ as _errors_all
from .tx import *  # noqa: F401,F403
from .tx import __all__ as _tx_all

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "xdr",
    "strkey",
    "Account",
    "Address",
    "decode_account_id",
    "decode_address_to_muxed_account",
    "encode_muxed_account",
    "encode_muxed_account_to_address",
    "extract_base_address",
    "Ed25519KeyPair",
    "Ed25519PublicKey",
    "Keypair",
    "verify_ed25519",
    "Network",
    "Networks",
    "network_id",
] + list(_errors_all) + list(_tx_all)
