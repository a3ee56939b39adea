from __future__ import annotations

from typing import Tuple

from .core import MD5_IV, block, md5_padding, u32, words_to_bytes_le
from .digest import md5_sum


def md5_bytes(data: bytes, iv: Tuple[int, int, int, int] = MD5_IV) -> bytes:
    # whole-message path: pad up front, then compress every block at once
    ihv = (u32(iv[0]), u32(iv[1]), u32(iv[2]), u32(iv[3]))
    msg = bytes(data) + md5_padding(len(data))
    ihv = block(ihv, msg)
    # digest is little-endian of ihv words in order (IV0, IV1, IV2, IV3)
    return words_to_bytes_le(ihv)


def md5_hex(data: bytes) -> str:
    return md5_sum(data).hex()
