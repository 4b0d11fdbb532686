from .factories import (
    DESTINATION_ADDRESS,
    ISSUER_ADDRESS,
    OTHER_ADDRESS,
    SOURCE_ADDRESS,
    mk_credit_asset,
    mk_ed25519_keypair,
    mk_muxed_address,
    mk_payment_transaction,
)
from .parity import assert_hex_equal

__all__ = [
    "DESTINATION_ADDRESS",
    "ISSUER_ADDRESS",
    "OTHER_ADDRESS",
    "SOURCE_ADDRESS",
    "mk_credit_asset",
    "mk_ed25519_keypair",
    "mk_muxed_address",
    "mk_payment_transaction",
    "assert_hex_equal",
]
