"""
Hash Functions

SHA-256 is the only digest used by the network for transaction hashes,
network ids and liquidity pool ids.
"""

import hashlib


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def sha256_concat(*parts: bytes) -> bytes:
    """Hash the concatenation of several byte strings, in the given order."""
    hasher = hashlib.sha256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()
