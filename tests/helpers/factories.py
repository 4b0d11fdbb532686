"""
Test factories for creating test data consistently.

Provides deterministic key pairs, muxed addresses, credit assets and
ready-to-sign transactions.
"""

from __future__ import annotations

from typing import Optional, Union

from stellar_client.account import Account
from stellar_client.crypto.ed25519 import Ed25519KeyPair
from stellar_client.network import Networks
from stellar_client.runtime.address import encode_muxed_account, encode_muxed_account_to_address
from stellar_client.tx import operations
from stellar_client.tx.asset import Asset
from stellar_client.tx.builder import TransactionBuilder
from stellar_client.tx.transaction import Transaction

# Accounts from the public test network
SOURCE_ADDRESS = "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ"
DESTINATION_ADDRESS = "GDJJRRMBK4IWLEPJGIE6SXD2LP7REGZODU7WDC3I2D6MR37F4XSHBKX2"
ISSUER_ADDRESS = "GBBM6BKZPEHWYO3E3YKREDPQXMS4VK35YLNU7NFBRI26RAN7GI5POFBB"
OTHER_ADDRESS = "GAQODVWAY3AYAGEAT4CG3YSPM4FBTBB2QSXCYJLM3HVIV5ILTP5BRXCD"


def mk_ed25519_keypair(seed: Union[int, bytes]) -> Ed25519KeyPair:
    """
    Create a deterministic key pair.

    Args:
        seed: An int (big-endian encoded) or up to 32 bytes (zero padded)
    """
    if isinstance(seed, int):
        seed_bytes = seed.to_bytes(32, "big")
    else:
        seed_bytes = seed.ljust(32, b"\x00")
    return Ed25519KeyPair.from_raw_ed25519_seed(seed_bytes)


def mk_muxed_address(address: str, mux_id: Union[int, str]) -> str:
    """M... text for a G... address and id."""
    return encode_muxed_account_to_address(encode_muxed_account(address, mux_id))


def mk_credit_asset(code: str = "USD", issuer: str = ISSUER_ADDRESS) -> Asset:
    return Asset(code, issuer)


def mk_payment_transaction(
    keypair: Ed25519KeyPair,
    sequence: str = "0",
    amount: str = "10",
    destination: str = DESTINATION_ADDRESS,
    network_passphrase: str = Networks.TESTNET,
    memo_text: Optional[str] = None,
) -> Transaction:
    """Build an unsigned single-payment transaction from `keypair`'s account."""
    builder = TransactionBuilder(Account(keypair.address, sequence), network_passphrase)
    builder.add_operation(operations.payment(destination, Asset.native(), amount))
    if memo_text is not None:
        builder.add_memo(memo_text)
    return builder.build()
