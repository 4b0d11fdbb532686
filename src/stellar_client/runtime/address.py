"""
Address type for account (G...) and muxed account (M...) strkeys.

Also provides the conversions between textual addresses and the
``MuxedAccount`` / ``AccountID`` wire records used by operations and
transactions.
"""

from __future__ import annotations

import struct
from typing import Any, Optional, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from . import strkey
from .errors import AddressError, ErrorCode
from ..xdr import types as xdr

UINT64_MAX = 0xFFFFFFFFFFFFFFFF


def _parse_uint64(value: Union[str, int], what: str = "id") -> int:
    if isinstance(value, bool):
        raise AddressError(f"{what} should be a string representing a number (uint64)")
    if isinstance(value, str):
        if not value.isdigit() or not value.isascii():
            raise AddressError(f"{what} should be a string representing a number (uint64)")
        value = int(value)
    if not isinstance(value, int) or value < 0 or value > UINT64_MAX:
        raise AddressError(f"{what} should be a string representing a number (uint64)")
    return value


class Address:
    """
    A simple (one public key) or muxed (public key + uint64 id) address.

    Immutable once constructed; the id of a muxed address carries no
    semantic range restriction beyond uint64.
    """

    __slots__ = ("_ed25519", "_id")

    def __init__(self, ed25519: bytes, id: Optional[int] = None):
        if not isinstance(ed25519, (bytes, bytearray)) or len(ed25519) != 32:
            raise AddressError("Ed25519 public key must be 32 bytes")
        if id is not None:
            id = _parse_uint64(id)
        self._ed25519 = bytes(ed25519)
        self._id = id

    @classmethod
    def from_string(cls, text: str) -> Address:
        """
        Decode a G... or M... address.

        Raises:
            AddressError: If the checksum, version byte or length is invalid
        """
        if not isinstance(text, str) or not text:
            raise AddressError(f"Invalid address: {text!r}")
        if text[0] == "G":
            return cls(strkey.decode_ed25519_public_key(text))
        if text[0] == "M":
            raw = strkey.decode_med25519_public_key(text)
            return cls(raw[:32], struct.unpack(">Q", raw[32:])[0])
        raise AddressError(
            f"Unsupported address kind: {text!r}",
            code=ErrorCode.UNSUPPORTED_ADDRESS_KIND,
        )

    @classmethod
    def from_muxed_account(cls, record: xdr.MuxedAccount) -> Address:
        return cls(record.ed25519, record.id)

    @classmethod
    def from_account_id(cls, record: xdr.PublicKey) -> Address:
        return cls(record.ed25519)

    @property
    def ed25519(self) -> bytes:
        return self._ed25519

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def is_muxed(self) -> bool:
        return self._id is not None

    @property
    def base_address(self) -> str:
        """The G... form of the underlying key."""
        return strkey.encode_ed25519_public_key(self._ed25519)

    def to_string(self) -> str:
        if self._id is None:
            return self.base_address
        return strkey.encode_med25519_public_key(self._ed25519 + struct.pack(">Q", self._id))

    def to_muxed_account(self) -> xdr.MuxedAccount:
        return xdr.MuxedAccount(self._ed25519, self._id)

    def to_account_id(self) -> xdr.PublicKey:
        """AccountID of the underlying key; the mux id is dropped."""
        return xdr.PublicKey(self._ed25519)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Address('{self.to_string()}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Address):
            return self._ed25519 == other._ed25519 and self._id == other._id
        return False

    def __hash__(self) -> int:
        return hash((self._ed25519, self._id))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates an Address."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any, _info=None) -> Address:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls.from_string(value)
            except AddressError as e:
                raise ValueError(str(e))
        raise ValueError(f"Invalid Address: {value!r}")


def decode(text: str) -> Address:
    """Parse G... or M... text into an Address (checksum validated first)."""
    return Address.from_string(text)


def encode(address: Address) -> str:
    """Render an Address as its G... or M... text."""
    return address.to_string()


def decode_address_to_muxed_account(address: str) -> xdr.MuxedAccount:
    """
    Decode any address into the uniform MuxedAccount record.

    A plain G... address maps to the KEY_TYPE_ED25519 arm.
    """
    return Address.from_string(address).to_muxed_account()


def decode_account_id(address: str) -> xdr.PublicKey:
    """
    Decode an address that must be a single plain public key.

    Raises:
        AddressError: If the address is muxed or otherwise invalid
    """
    if isinstance(address, str) and address.startswith("M"):
        raise AddressError(
            f"expected account ID (G...), got muxed account {address}",
            code=ErrorCode.UNSUPPORTED_ADDRESS_KIND,
        )
    return Address.from_string(address).to_account_id()


def encode_muxed_account(address: str, id: Union[str, int]) -> xdr.MuxedAccount:
    """
    Build a muxed record from a G... address and a uint64 id.

    Raises:
        AddressError: If the address is not a G... key or the id is not a uint64
    """
    if not strkey.is_valid_ed25519_public_key(address):
        raise AddressError("address should be a Stellar account ID (G...)")
    mux_id = _parse_uint64(id)
    return xdr.MuxedAccount(strkey.decode_ed25519_public_key(address), mux_id)


def encode_muxed_account_to_address(record: xdr.MuxedAccount) -> str:
    """Encode a MuxedAccount record as G... or M... text, by its arm."""
    return Address.from_muxed_account(record).to_string()


def extract_base_address(address: str) -> str:
    """Return the G... address underlying either address form."""
    return Address.from_string(address).base_address


__all__ = [
    "Address",
    "decode",
    "encode",
    "decode_address_to_muxed_account",
    "decode_account_id",
    "encode_muxed_account",
    "encode_muxed_account_to_address",
    "extract_base_address",
]
