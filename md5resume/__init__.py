"""Resumable MD5 (RFC 1321) with exportable internal state."""

from .core import BLOCK_SIZE, SIZE, block
from .digest import Digest, md5_sum, new, new_from_state
from .md5 import md5_hex
from .state import DecodeError, DigestState, decode_state, encode_state

__all__ = [
    "BLOCK_SIZE",
    "SIZE",
    "block",
    "Digest",
    "md5_sum",
    "new",
    "new_from_state",
    "md5_hex",
    "DecodeError",
    "DigestState",
    "decode_state",
    "encode_state",
]
