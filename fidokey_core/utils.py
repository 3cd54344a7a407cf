"""
fidokey_core.utils
------------------
Lightweight helpers for big-endian integer conversion, hex rendering and digests.
"""

from __future__ import annotations
import hashlib
from typing import Any


def bytes2int(value: bytes) -> int:
    return int.from_bytes(value, "big")


def int2bytes(value: int, minlen: int = -1) -> bytes:
    # Big-endian, no leading zero bytes unless minlen requires them
    length = max((value.bit_length() + 7) // 8, minlen, 1)
    return value.to_bytes(length, "big")


def field_size(key_size: int) -> int:
    """Octet length of a field element for a curve of `key_size` bits."""
    return (key_size + 7) // 8


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def fingerprint(data: bytes, length: int = 32) -> str:
    # Hex SHA-256, truncated to keep log lines short
    return hashlib.sha256(data).hexdigest()[:length]


def diagnostic(value: Any) -> str:
    """Render a decoded COSE value in a compact, CBOR-diagnostic-like form."""
    if isinstance(value, (bytes, bytearray)):
        return "h'" + bytes(value).hex() + "'"
    if isinstance(value, dict):
        inner = ", ".join(f"{diagnostic(k)}: {diagnostic(v)}" for k, v in value.items())
        return "{" + inner + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(diagnostic(v) for v in value) + "]"
    if isinstance(value, str):
        return '"' + value + '"'
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(int(value)) if isinstance(value, int) else repr(value)
