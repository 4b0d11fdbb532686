"""
XDR Writer

Implements the XDR (RFC 4506) primitive encodings used on the wire:
big-endian integers, 4-byte aligned opaque data and strings.
"""

import builtins
import struct
from typing import List

from ..runtime.errors import MarshalError

UINT32_MAX = 0xFFFFFFFF
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT64_MAX = 0xFFFFFFFFFFFFFFFF
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _padding(length: int) -> int:
    return (4 - length % 4) % 4


class XdrWriter:
    """
    XDR writer accumulating encoded values into a byte buffer.

    Out-of-range values raise MarshalError instead of being masked, so a
    record never silently changes meaning on the wire.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def _check_range(self, v: int, lo: int, hi: int, kind: str) -> None:
        if not isinstance(v, int) or isinstance(v, bool):
            raise MarshalError(f"{kind} value must be an integer, got {type(v).__name__}")
        if v < lo or v > hi:
            raise MarshalError(f"{kind} value out of range: {v}")

    def u32(self, v: int) -> None:
        """
        Write unsigned 32-bit integer (big-endian).

        Args:
            v: Integer value in [0, 2^32)
        """
        self._check_range(v, 0, UINT32_MAX, "uint32")
        self._bb.extend(struct.pack(">I", v))

    def i32(self, v: int) -> None:
        """
        Write signed 32-bit integer (big-endian).

        Args:
            v: Integer value in [-2^31, 2^31)
        """
        self._check_range(v, INT32_MIN, INT32_MAX, "int32")
        self._bb.extend(struct.pack(">i", v))

    def u64(self, v: int) -> None:
        """
        Write unsigned 64-bit integer (big-endian).

        Args:
            v: Integer value in [0, 2^64)
        """
        self._check_range(v, 0, UINT64_MAX, "uint64")
        self._bb.extend(struct.pack(">Q", v))

    def i64(self, v: int) -> None:
        """
        Write signed 64-bit integer (big-endian).

        Args:
            v: Integer value in [-2^63, 2^63)
        """
        self._check_range(v, INT64_MIN, INT64_MAX, "int64")
        self._bb.extend(struct.pack(">q", v))

    def boolean(self, v: bool) -> None:
        """Write a boolean as a 32-bit 0/1."""
        self.u32(1 if v else 0)

    def opaque_fixed(self, v: bytes, size: int) -> None:
        """
        Write fixed-length opaque data, padded to a multiple of four.

        Args:
            v: Bytes to write, exactly `size` long
            size: Declared length of the field
        """
        if len(v) != size:
            raise MarshalError(f"Fixed opaque expects {size} bytes, got {len(v)}")
        self._bb.extend(v)
        self._bb.extend(b"\x00" * _padding(size))

    def opaque_var(self, v: bytes, max_size: int = UINT32_MAX) -> None:
        """
        Write variable-length opaque data with a uint32 length prefix.

        Args:
            v: Bytes to write
            max_size: Declared upper bound of the field
        """
        if len(v) > max_size:
            raise MarshalError(f"Variable opaque exceeds {max_size} bytes: {len(v)}")
        self.u32(len(v))
        self._bb.extend(v)
        self._bb.extend(b"\x00" * _padding(len(v)))

    def string(self, s: bytes, max_size: int = UINT32_MAX) -> None:
        """
        Write an XDR string.

        XDR strings are byte strings; callers encode text beforehand.
        """
        self.opaque_var(s, max_size)

    def array_length(self, n: int, max_size: int = UINT32_MAX) -> None:
        """Write the length prefix of a variable-length array."""
        if n > max_size:
            raise MarshalError(f"Array exceeds {max_size} elements: {n}")
        self.u32(n)

    def bytes(self, v: bytes) -> None:
        """Write raw bytes without length prefix or padding."""
        self._bb.extend(v)

    def to_bytes(self) -> builtins.bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
