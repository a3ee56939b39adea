"""
MD5 block compression using Numba JIT.

Same contract as ``md5resume.core.block``: consumes whole 64-byte blocks and
returns the updated running state. Useful for long writes where the
pure-Python step loop dominates.
"""

from __future__ import annotations

import os
from typing import Tuple

import numpy as np

from .core import AC, BLOCK_SIZE, RC, WT

try:
    if os.getenv("MD5RESUME_NO_NUMBA") == "1":
        raise ImportError("MD5RESUME_NO_NUMBA=1")
    from numba import njit
except Exception:  # pragma: no cover
    njit = None


# int64 everywhere: uint32 values never overflow it and numba keeps the
# arithmetic integral (mixing uint64 with int64 would promote to float64).
_MD5_AC = np.array(AC, dtype=np.int64)
_MD5_RC = np.array(RC, dtype=np.int64)
_MD5_G = np.array(WT, dtype=np.int64)


def numba_available() -> bool:
    return njit is not None


if njit is not None:

    @njit(cache=True, inline="always")
    def _rol(x: int, n: int) -> int:
        x &= 0xFFFFFFFF
        return ((x << n) | (x >> (32 - n))) & 0xFFFFFFFF

    @njit(cache=True)
    def md5_compress_blocks(ihv: np.ndarray, words: np.ndarray) -> np.ndarray:
        out = ihv.copy()
        for k in range(words.shape[0]):
            a0 = out[0]
            b0 = out[1]
            c0 = out[2]
            d0 = out[3]
            a = a0
            b = b0
            c = c0
            d = d0
            for i in range(64):
                if i < 16:
                    f = (b & c) | (~b & d)
                elif i < 32:
                    f = (b & d) | (c & ~d)
                elif i < 48:
                    f = b ^ c ^ d
                else:
                    f = c ^ (b | ~d)
                tmp = (a + (f & 0xFFFFFFFF) + _MD5_AC[i] + words[k, _MD5_G[i]]) & 0xFFFFFFFF
                tmp = (b + _rol(tmp, _MD5_RC[i])) & 0xFFFFFFFF
                a, d, c, b = d, c, b, tmp
            out[0] = (a0 + a) & 0xFFFFFFFF
            out[1] = (b0 + b) & 0xFFFFFFFF
            out[2] = (c0 + c) & 0xFFFFFFFF
            out[3] = (d0 + d) & 0xFFFFFFFF
        return out


def block_numba(state: Tuple[int, int, int, int], data) -> Tuple[int, int, int, int]:
    if njit is None:
        raise RuntimeError("numba is not available (install numba or unset MD5RESUME_NO_NUMBA)")
    n = len(data) - len(data) % BLOCK_SIZE
    if n == 0:
        return tuple(state)
    words = np.frombuffer(data, dtype="<u4", count=n // 4).astype(np.int64).reshape(-1, 16)
    ihv = np.array(state, dtype=np.int64)
    s = md5_compress_blocks(ihv, words)
    return (int(s[0]), int(s[1]), int(s[2]), int(s[3]))
