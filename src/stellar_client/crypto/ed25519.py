"""
Ed25519 cryptographic operations.

Thin wrappers over the ``cryptography`` Ed25519 primitive, adding the
network's strkey forms (G... public keys, S... secret seeds) and signature
hints.
"""

from __future__ import annotations

import hashlib
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..runtime import strkey
from ..runtime.errors import AddressError, ErrorCode, SignatureError
from ..xdr import types as xdr


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 32-byte public key.

        Raises:
            SignatureError: If key is invalid
        """
        if len(public_key_bytes) != 32:
            raise SignatureError(
                f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}",
                code=ErrorCode.INVALID_KEY,
            )
        self._key_bytes = bytes(public_key_bytes)
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(self._key_bytes)
        except ValueError as e:
            raise SignatureError(f"Invalid Ed25519 public key: {e}", code=ErrorCode.INVALID_KEY, cause=e)

    @classmethod
    def from_address(cls, address: str) -> Ed25519PublicKey:
        """Create public key from a G... strkey."""
        return cls(strkey.decode_ed25519_public_key(address))

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_address(self) -> str:
        """Get the G... strkey of this key."""
        return strkey.encode_ed25519_public_key(self._key_bytes)

    def signature_hint(self) -> bytes:
        """Last four bytes of the public key, as carried in decorated signatures."""
        return self._key_bytes[-4:]

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != 64:
            return False
        try:
            self._crypto_key.verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey('{self.to_address()}')"


class Ed25519KeyPair:
    """
    Ed25519 key pair.

    A key pair built from a public key alone can verify but not sign.
    """

    def __init__(self, public_key: Ed25519PublicKey, seed: Optional[bytes] = None):
        self.public_key = public_key
        self._seed = seed
        self._crypto_key: Optional[CryptoEd25519PrivateKey] = None
        if seed is not None:
            self._crypto_key = CryptoEd25519PrivateKey.from_private_bytes(seed)
            derived = self._crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
            if derived != public_key.to_bytes():
                raise SignatureError("Seed does not match public key", code=ErrorCode.INVALID_KEY)

    @classmethod
    def from_raw_ed25519_seed(cls, seed: bytes) -> Ed25519KeyPair:
        """
        Create key pair from a raw 32-byte seed.

        Raises:
            SignatureError: If seed is not exactly 32 bytes
        """
        if len(seed) != 32:
            raise SignatureError("Seed must be exactly 32 bytes", code=ErrorCode.INVALID_KEY)
        private_key = CryptoEd25519PrivateKey.from_private_bytes(seed)
        public_bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        return cls(Ed25519PublicKey(public_bytes), bytes(seed))

    @classmethod
    def generate(cls) -> Ed25519KeyPair:
        """Generate a new random key pair."""
        private_key = CryptoEd25519PrivateKey.generate()
        seed = private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls.from_raw_ed25519_seed(seed)

    @classmethod
    def from_secret(cls, secret: str) -> Ed25519KeyPair:
        """Create key pair from an S... secret seed."""
        return cls.from_raw_ed25519_seed(strkey.decode_ed25519_secret_seed(secret))

    @classmethod
    def from_public_key(cls, address: str) -> Ed25519KeyPair:
        """Create a verify-only key pair from a G... address."""
        return cls(Ed25519PublicKey.from_address(address))

    @classmethod
    def master(cls, network_passphrase: str) -> Ed25519KeyPair:
        """Network root key pair, seeded by the hash of the passphrase."""
        return cls.from_raw_ed25519_seed(hashlib.sha256(network_passphrase.encode("utf-8")).digest())

    @property
    def can_sign(self) -> bool:
        return self._crypto_key is not None

    @property
    def address(self) -> str:
        """G... strkey of the public key."""
        return self.public_key.to_address()

    def secret_seed(self) -> str:
        """S... strkey of the seed."""
        if self._seed is None:
            raise SignatureError("Key pair has no secret seed", code=ErrorCode.INVALID_KEY)
        return strkey.encode_ed25519_secret_seed(self._seed)

    def public_key_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    def signature_hint(self) -> bytes:
        return self.public_key.signature_hint()

    def xdr_account_id(self) -> xdr.PublicKey:
        return xdr.PublicKey(self.public_key.to_bytes())

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Returns:
            64-byte Ed25519 signature

        Raises:
            SignatureError: If the key pair holds no secret
        """
        if self._crypto_key is None:
            raise SignatureError("Key pair cannot sign without a secret seed", code=ErrorCode.INVALID_KEY)
        return self._crypto_key.sign(message)

    def sign_decorated(self, message: bytes) -> xdr.DecoratedSignature:
        """Sign and pair the signature with this key's hint."""
        return xdr.DecoratedSignature(self.signature_hint(), self.sign(message))

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a signature against a message."""
        return self.public_key.verify(signature, message)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519KeyPair):
            return False
        return self.public_key == other.public_key and self._seed == other._seed

    def __repr__(self) -> str:
        return f"Ed25519KeyPair('{self.address}')"


def verify_ed25519(public_key: Union[str, bytes], signature: bytes, message: bytes) -> bool:
    """
    Verify an Ed25519 signature. Returns True if valid, False otherwise.

    Args:
        public_key: G... address or 32 raw bytes
        signature: 64-byte signature
        message: Message that was signed
    """
    try:
        if isinstance(public_key, str):
            key = Ed25519PublicKey.from_address(public_key)
        else:
            key = Ed25519PublicKey(public_key)
    except (AddressError, SignatureError):
        return False
    return key.verify(signature, message)


__all__ = [
    "Ed25519PublicKey",
    "Ed25519KeyPair",
    "verify_ed25519",
]
