"""
XDR Reader

Decodes the XDR primitive encodings produced by XdrWriter. Every read checks
bounds; padding bytes must be zero.
"""

import builtins
import struct

from ..runtime.errors import UnmarshalError
from .writer import UINT32_MAX


class XdrReader:
    """
    XDR reader over an immutable byte buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True if the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _take(self, n: int) -> builtins.bytes:
        if self._off + n > len(self._buf):
            raise UnmarshalError(f"Buffer overflow: attempting to read {n} bytes beyond end")
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def _skip_padding(self, length: int) -> None:
        pad = (4 - length % 4) % 4
        if pad and self._take(pad) != b"\x00" * pad:
            raise UnmarshalError("Non-zero XDR padding")

    def u32(self) -> int:
        """Read unsigned 32-bit integer (big-endian)."""
        return struct.unpack(">I", self._take(4))[0]

    def i32(self) -> int:
        """Read signed 32-bit integer (big-endian)."""
        return struct.unpack(">i", self._take(4))[0]

    def u64(self) -> int:
        """Read unsigned 64-bit integer (big-endian)."""
        return struct.unpack(">Q", self._take(8))[0]

    def i64(self) -> int:
        """Read signed 64-bit integer (big-endian)."""
        return struct.unpack(">q", self._take(8))[0]

    def boolean(self) -> bool:
        """Read a boolean; only 0 and 1 are accepted."""
        v = self.u32()
        if v not in (0, 1):
            raise UnmarshalError(f"Invalid XDR boolean: {v}")
        return v == 1

    def opaque_fixed(self, size: int) -> builtins.bytes:
        """
        Read fixed-length opaque data.

        Args:
            size: Declared length of the field

        Returns:
            Bytes of specified length
        """
        out = self._take(size)
        self._skip_padding(size)
        return out

    def opaque_var(self, max_size: int = UINT32_MAX) -> builtins.bytes:
        """
        Read variable-length opaque data with uint32 length prefix.

        Args:
            max_size: Declared upper bound of the field
        """
        n = self.u32()
        if n > max_size:
            raise UnmarshalError(f"Variable opaque exceeds {max_size} bytes: {n}")
        out = self._take(n)
        self._skip_padding(n)
        return out

    def string(self, max_size: int = UINT32_MAX) -> builtins.bytes:
        """Read an XDR string as raw bytes."""
        return self.opaque_var(max_size)

    def array_length(self, max_size: int = UINT32_MAX) -> int:
        """Read the length prefix of a variable-length array."""
        n = self.u32()
        if n > max_size:
            raise UnmarshalError(f"Array exceeds {max_size} elements: {n}")
        return n

    def expect_eof(self) -> None:
        """Fail if unread bytes remain."""
        if not self.eof:
            raise UnmarshalError(f"{self.remaining} trailing bytes after XDR record")
