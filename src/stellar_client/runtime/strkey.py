"""
StrKey textual key encoding.

A strkey is the unpadded RFC 4648 base32 encoding of
``version_byte || payload || crc16_xmodem(version_byte || payload)``
with the two checksum bytes in little-endian order.
"""

from __future__ import annotations

import base64
import binascii
import struct
from enum import IntEnum
from typing import Dict

from .errors import AddressError, ErrorCode


class VersionByte(IntEnum):
    """Leading byte of each strkey kind (selects the first character)."""

    ED25519_PUBLIC_KEY = 6 << 3    # G
    MED25519_PUBLIC_KEY = 12 << 3  # M
    ED25519_SECRET_SEED = 18 << 3  # S
    PRE_AUTH_TX = 19 << 3          # T
    SHA256_HASH = 23 << 3          # X


PAYLOAD_LENGTHS: Dict[VersionByte, int] = {
    VersionByte.ED25519_PUBLIC_KEY: 32,
    VersionByte.MED25519_PUBLIC_KEY: 40,
    VersionByte.ED25519_SECRET_SEED: 32,
    VersionByte.PRE_AUTH_TX: 32,
    VersionByte.SHA256_HASH: 32,
}


def crc16_xmodem(data: bytes) -> bytes:
    """CRC16-XModem checksum of `data`, little-endian."""
    return struct.pack("<H", binascii.crc_hqx(data, 0))


def encode_check(version_byte: VersionByte, payload: bytes) -> str:
    """
    Encode a payload under the given version byte.

    Args:
        version_byte: Kind of key being encoded
        payload: Raw key bytes

    Returns:
        Unpadded base32 strkey text

    Raises:
        AddressError: If the payload length does not match the kind
    """
    expected = PAYLOAD_LENGTHS[version_byte]
    if len(payload) != expected:
        raise AddressError(
            f"{version_byte.name} payload must be {expected} bytes, got {len(payload)}"
        )
    data = bytes([version_byte]) + payload
    return base64.b32encode(data + crc16_xmodem(data)).decode("ascii").rstrip("=")


def decode_check(version_byte: VersionByte, text: str) -> bytes:
    """
    Decode strkey text, validating version byte and checksum.

    Args:
        version_byte: Expected kind
        text: Strkey text

    Returns:
        The raw payload

    Raises:
        AddressError: If the text is malformed, of another kind, or the checksum fails
    """
    if not isinstance(text, str):
        raise AddressError(f"Strkey must be a string, got {type(text).__name__}")

    expected = PAYLOAD_LENGTHS[version_byte]
    raw_length = 1 + expected + 2
    if len(text) != (raw_length * 8 + 4) // 5 or "=" in text:
        raise AddressError(f"Invalid {version_byte.name} strkey length: {text!r}")

    try:
        raw = base64.b32decode(text + "=" * (-len(text) % 8), casefold=False)
    except (binascii.Error, ValueError) as e:
        raise AddressError(f"Invalid base32 strkey: {text!r}", cause=e)

    # Rejects non-zero trailing bits, which would otherwise alias another key.
    if base64.b32encode(raw).decode("ascii").rstrip("=") != text:
        raise AddressError(f"Non-canonical strkey encoding: {text!r}")

    if raw[0] != version_byte:
        raise AddressError(
            f"Invalid version byte: expected {version_byte.name}, got {raw[0]}",
            code=ErrorCode.INVALID_VERSION_BYTE,
        )

    data, checksum = raw[:-2], raw[-2:]
    if crc16_xmodem(data) != checksum:
        raise AddressError(f"Invalid strkey checksum: {text!r}", code=ErrorCode.INVALID_CHECKSUM)

    return data[1:]


def is_valid(version_byte: VersionByte, text: str) -> bool:
    """Check whether `text` decodes as the given kind."""
    try:
        decode_check(version_byte, text)
    except AddressError:
        return False
    return True


def encode_ed25519_public_key(data: bytes) -> str:
    return encode_check(VersionByte.ED25519_PUBLIC_KEY, data)


def decode_ed25519_public_key(text: str) -> bytes:
    return decode_check(VersionByte.ED25519_PUBLIC_KEY, text)


def is_valid_ed25519_public_key(text: str) -> bool:
    return is_valid(VersionByte.ED25519_PUBLIC_KEY, text)


def encode_ed25519_secret_seed(data: bytes) -> str:
    return encode_check(VersionByte.ED25519_SECRET_SEED, data)


def decode_ed25519_secret_seed(text: str) -> bytes:
    return decode_check(VersionByte.ED25519_SECRET_SEED, text)


def encode_med25519_public_key(data: bytes) -> str:
    return encode_check(VersionByte.MED25519_PUBLIC_KEY, data)


def decode_med25519_public_key(text: str) -> bytes:
    return decode_check(VersionByte.MED25519_PUBLIC_KEY, text)


def is_valid_med25519_public_key(text: str) -> bool:
    return is_valid(VersionByte.MED25519_PUBLIC_KEY, text)


def encode_pre_auth_tx(data: bytes) -> str:
    return encode_check(VersionByte.PRE_AUTH_TX, data)


def decode_pre_auth_tx(text: str) -> bytes:
    return decode_check(VersionByte.PRE_AUTH_TX, text)


def encode_sha256_hash(data: bytes) -> str:
    return encode_check(VersionByte.SHA256_HASH, data)


def decode_sha256_hash(text: str) -> bytes:
    return decode_check(VersionByte.SHA256_HASH, text)


__all__ = [
    "VersionByte",
    "crc16_xmodem",
    "encode_check",
    "decode_check",
    "is_valid",
    "encode_ed25519_public_key",
    "decode_ed25519_public_key",
    "is_valid_ed25519_public_key",
    "encode_ed25519_secret_seed",
    "decode_ed25519_secret_seed",
    "encode_med25519_public_key",
    "decode_med25519_public_key",
    "is_valid_med25519_public_key",
    "encode_pre_auth_tx",
    "decode_pre_auth_tx",
    "encode_sha256_hash",
    "decode_sha256_hash",
]
