"""
Network passphrases.

A transaction's signing payload is bound to one network through the hash of
its passphrase (the network id), preventing cross-network replay.
"""

from __future__ import annotations

from .codec.hashes import sha256_bytes


class Networks:
    """Well-known network passphrases."""

    PUBLIC = "Public Global Stellar Network ; September 2015"
    TESTNET = "Test SDF Network ; September 2015"
    FUTURENET = "Test SDF Future Network ; October 2022"
    SANDBOX = "Local Sandbox Stellar Network ; September 2022"
    STANDALONE = "Standalone Network ; February 2017"


def network_id(passphrase: str) -> bytes:
    """
    Network id: SHA-256 of the UTF-8 passphrase.

    Args:
        passphrase: Network passphrase

    Returns:
        32-byte network id
    """
    return sha256_bytes(passphrase.encode("utf-8"))


class Network:
    """A network identified by its passphrase."""

    def __init__(self, network_passphrase: str):
        self.network_passphrase = network_passphrase

    def network_id(self) -> bytes:
        return network_id(self.network_passphrase)

    @classmethod
    def public_network(cls) -> Network:
        return cls(Networks.PUBLIC)

    @classmethod
    def testnet_network(cls) -> Network:
        return cls(Networks.TESTNET)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return self.network_passphrase == other.network_passphrase

    def __hash__(self) -> int:
        return hash(self.network_passphrase)

    def __repr__(self) -> str:
        return f"Network('{self.network_passphrase}')"
