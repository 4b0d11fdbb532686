"""
XDR Binary Codec Module

Key components:
- writer.py: XDR writer for big-endian integers, opaque data and strings
- reader.py: XDR reader with bounds and padding checks
- hashes.py: SHA-256 hashing helpers
"""

from .hashes import sha256_bytes, sha256_concat
from .reader import XdrReader
from .writer import XdrWriter

__all__ = [
    "XdrReader",
    "XdrWriter",
    "sha256_bytes",
    "sha256_concat",
]
