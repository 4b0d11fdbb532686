"""
Cryptographic primitives.

Provides Ed25519 key pairs, signing and verification.
"""

from .ed25519 import Ed25519KeyPair, Ed25519PublicKey, verify_ed25519

Keypair = Ed25519KeyPair

__all__ = [
    "Ed25519KeyPair",
    "Ed25519PublicKey",
    "Keypair",
    "verify_ed25519",
]
