"""
Transaction memos.
"""

from __future__ import annotations

from typing import Union

from ..runtime.errors import BuilderError
from ..xdr import types as xdr

UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class Memo:
    """
    Memo attached to a transaction: none, text (<= 28 bytes UTF-8), id
    (uint64), hash or return hash (32 bytes each).
    """

    def __init__(self, memo_type: xdr.MemoType = xdr.MemoType.MEMO_NONE,
                 value: Union[None, bytes, int] = None):
        self._record = xdr.Memo(memo_type, value)

    @classmethod
    def none(cls) -> Memo:
        return cls()

    @classmethod
    def text(cls, text: Union[str, bytes]) -> Memo:
        """
        Raises:
            BuilderError: If the text is longer than 28 bytes
        """
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        if len(raw) > xdr.MEMO_TEXT_MAX:
            raise BuilderError(f"Memo text must be at most {xdr.MEMO_TEXT_MAX} bytes, got {len(raw)}")
        return cls(xdr.MemoType.MEMO_TEXT, raw)

    @classmethod
    def id(cls, memo_id: Union[str, int]) -> Memo:
        """
        Raises:
            BuilderError: If the id is not a uint64
        """
        if isinstance(memo_id, str) and memo_id.isascii() and memo_id.isdigit():
            memo_id = int(memo_id)
        if isinstance(memo_id, bool) or not isinstance(memo_id, int) or not 0 <= memo_id <= UINT64_MAX:
            raise BuilderError(f"Memo id must be a uint64, got {memo_id!r}")
        return cls(xdr.MemoType.MEMO_ID, memo_id)

    @classmethod
    def hash(cls, value: Union[str, bytes]) -> Memo:
        return cls(xdr.MemoType.MEMO_HASH, cls._hash_bytes(value))

    @classmethod
    def return_hash(cls, value: Union[str, bytes]) -> Memo:
        return cls(xdr.MemoType.MEMO_RETURN, cls._hash_bytes(value))

    @staticmethod
    def _hash_bytes(value: Union[str, bytes]) -> bytes:
        if isinstance(value, str):
            try:
                value = bytes.fromhex(value)
            except ValueError as e:
                raise BuilderError(f"Memo hash must be hex or 32 bytes: {e}", cause=e)
        if len(value) != 32:
            raise BuilderError(f"Memo hash must be 32 bytes, got {len(value)}")
        return bytes(value)

    @property
    def type(self) -> xdr.MemoType:
        return self._record.type

    @property
    def value(self) -> Union[None, bytes, int]:
        return self._record.value

    def to_xdr_object(self) -> xdr.Memo:
        return self._record

    @classmethod
    def from_xdr_object(cls, record: xdr.Memo) -> Memo:
        return cls(record.type, record.value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Memo):
            return NotImplemented
        return self._record == other._record

    def __hash__(self) -> int:
        return hash(self._record)

    def __repr__(self) -> str:
        return f"Memo(type={self.type.name}, value={self.value!r})"
