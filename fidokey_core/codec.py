"""
fidokey_core.codec
------------------
CBOR boundary for COSE key maps.

Maps are encoded in insertion order (no canonical re-sorting) so that a
decoded key re-encodes to the same label order. Integers and byte strings
keep their CBOR major types on the round trip.
"""

from __future__ import annotations
from io import BytesIO
from typing import Any, BinaryIO, Dict, Mapping

import cbor2

from .errors import MalformedParameters


def encode(cose: Mapping[int, Any]) -> bytes:
    return cbor2.dumps(dict(cose))


def _require_map(obj: Any) -> Dict[int, Any]:
    if not isinstance(obj, dict):
        raise MalformedParameters(f"COSE key must be a CBOR map, got {type(obj).__name__}")
    return obj


def read(fp: BinaryIO) -> Dict[int, Any]:
    """Read exactly one CBOR item from `fp`; the stream is left after that item."""
    try:
        obj = cbor2.load(fp)
    except (cbor2.CBORDecodeError, EOFError) as exc:
        raise MalformedParameters(f"Invalid CBOR: {exc}") from exc
    return _require_map(obj)


def decode(data: bytes) -> Dict[int, Any]:
    fp = BytesIO(data)
    obj = read(fp)
    if fp.tell() != len(data):
        raise MalformedParameters(
            f"Trailing data after COSE key ({len(data) - fp.tell()} bytes)"
        )
    return obj
