"""
Asset descriptors and their canonical ordering.
"""

from __future__ import annotations

import re
from typing import Optional

from ..runtime import strkey
from ..runtime.errors import OperationError
from ..xdr import types as xdr

_CODE_RE = re.compile(r"^[a-zA-Z0-9]{1,12}$")
NATIVE_CODE = "XLM"


class Asset:
    """
    The native asset or a credit asset (code + issuer).

    Codes of 1-4 characters are alphanum4 assets, 5-12 characters alphanum12.
    """

    def __init__(self, code: str, issuer: Optional[str] = None):
        """
        Raises:
            OperationError: If the code is malformed or a credit asset lacks a valid issuer
        """
        if not isinstance(code, str) or not _CODE_RE.match(code):
            raise OperationError(f"Asset code is invalid (maximum alphanumeric, 12 characters at max): {code!r}")
        if issuer is None and code != NATIVE_CODE:
            raise OperationError("Issuer cannot be null")
        if issuer is not None and not strkey.is_valid_ed25519_public_key(issuer):
            raise OperationError(f"Issuer is invalid: {issuer!r}")
        self.code = code
        self.issuer = issuer

    @classmethod
    def native(cls) -> Asset:
        return cls(NATIVE_CODE)

    @property
    def is_native(self) -> bool:
        return self.issuer is None

    @property
    def type(self) -> xdr.AssetType:
        if self.is_native:
            return xdr.AssetType.ASSET_TYPE_NATIVE
        if len(self.code) <= 4:
            return xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4
        return xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12

    def to_xdr_object(self) -> xdr.Asset:
        if self.is_native:
            return xdr.Asset(xdr.AssetType.ASSET_TYPE_NATIVE)
        width = 4 if self.type == xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4 else 12
        code = self.code.encode("ascii").ljust(width, b"\x00")
        issuer = xdr.PublicKey(strkey.decode_ed25519_public_key(self.issuer))
        return xdr.Asset(self.type, code, issuer)

    @classmethod
    def from_xdr_object(cls, record: xdr.Asset) -> Asset:
        if record.type == xdr.AssetType.ASSET_TYPE_NATIVE:
            return cls.native()
        code = record.code.rstrip(b"\x00").decode("ascii")
        return cls(code, strkey.encode_ed25519_public_key(record.issuer.ed25519))

    @staticmethod
    def compare(asset_a: Asset, asset_b: Asset) -> int:
        """
        Total order: asset type, then code, then issuer (byte-wise ASCII).

        Returns:
            -1, 0 or 1
        """
        if asset_a == asset_b:
            return 0
        if asset_a.type != asset_b.type:
            return -1 if asset_a.type < asset_b.type else 1
        if asset_a.code != asset_b.code:
            return -1 if asset_a.code < asset_b.code else 1
        return -1 if asset_a.issuer < asset_b.issuer else 1

    def __lt__(self, other: Asset) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return Asset.compare(self, other) < 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Asset):
            return NotImplemented
        return self.code == other.code and self.issuer == other.issuer

    def __hash__(self) -> int:
        return hash((self.code, self.issuer))

    def __str__(self) -> str:
        if self.is_native:
            return "native"
        return f"{self.code}:{self.issuer}"

    def __repr__(self) -> str:
        return f"Asset(code='{self.code}', issuer={self.issuer!r})"
