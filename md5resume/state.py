"""
Serialized form of a streaming MD5 engine.

A state blob is a sequence of length-prefixed fields, each laid out as::

    tag (1 byte) | payload length (uint32 LE) | payload

in the fixed order

    b"S"  running state words, 4 x uint32 LE
    b"X"  input buffer, all 64 bytes (including stale bytes past nx)
    b"N"  valid byte count nx, uint32 LE
    b"L"  total bytes written, uint64 LE

Nothing may follow the last field.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Tuple

from .core import BLOCK_SIZE

_FIELD_HEADER = struct.Struct("<cI")

# (tag, payload format) in encoding order
_FIELDS: Tuple[Tuple[bytes, str], ...] = (
    (b"S", "<4I"),
    (b"X", f"<{BLOCK_SIZE}s"),
    (b"N", "<I"),
    (b"L", "<Q"),
)


class DecodeError(ValueError):
    """Raised when a state blob is malformed, truncated or has the wrong shape."""


@dataclass(frozen=True)
class DigestState:
    words: Tuple[int, int, int, int]
    buffer: bytes
    nx: int
    length: int


def encode_state(st: DigestState) -> bytes:
    values = (tuple(st.words), (bytes(st.buffer),), (st.nx,), (st.length,))
    out = bytearray()
    for (tag, fmt), vals in zip(_FIELDS, values):
        payload = struct.pack(fmt, *vals)
        out += _FIELD_HEADER.pack(tag, len(payload))
        out += payload
    return bytes(out)


def decode_state(blob: bytes) -> DigestState:
    try:
        view = memoryview(blob)
    except TypeError as exc:
        raise DecodeError(f"state must be bytes-like, got {type(blob).__name__}") from exc

    off = 0
    fields: List[tuple] = []
    for tag, fmt in _FIELDS:
        try:
            got_tag, size = _FIELD_HEADER.unpack_from(view, off)
        except struct.error as exc:
            raise DecodeError(f"truncated state: missing field {tag!r} at offset {off}") from exc
        off += _FIELD_HEADER.size
        if got_tag != tag:
            raise DecodeError(f"unexpected field {got_tag!r} at offset {off - _FIELD_HEADER.size}, want {tag!r}")
        want = struct.calcsize(fmt)
        if size != want:
            raise DecodeError(f"field {tag!r} has length {size}, want {want}")
        try:
            fields.append(struct.unpack_from(fmt, view, off))
        except struct.error as exc:
            raise DecodeError(f"truncated state: field {tag!r} needs {size} bytes") from exc
        off += size

    if off != len(view):
        raise DecodeError(f"{len(view) - off} trailing bytes after state")

    words, (buf,), (nx,), (length,) = fields
    return DigestState(words=tuple(words), buffer=buf, nx=nx, length=length)
