from __future__ import annotations

import struct
from typing import Iterable, Tuple

MASK32 = 0xFFFFFFFF

# The size of an MD5 checksum in bytes.
SIZE = 16

# The block size of MD5 in bytes.
BLOCK_SIZE = 64

# MD5 initial value (A, B, C, D)
MD5_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


# AC_t = floor(2^32 * abs(sin(t+1))), RFC 1321 T[1..64]
AC: Tuple[int, ...] = (
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
)

# Rotation constants (RC_t) per step
RC: Tuple[int, ...] = tuple(
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)


# Message word index for each step, t -> m-index
WT: Tuple[int, ...] = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    1, 6, 11, 0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12,
    5, 8, 11, 14, 1, 4, 7, 10, 13, 0, 3, 6, 9, 12, 15, 2,
    0, 7, 14, 5, 12, 3, 10, 1, 8, 15, 6, 13, 4, 11, 2, 9,
)


def block(state: Tuple[int, int, int, int], data) -> Tuple[int, int, int, int]:
    """
    MD5 compression over consecutive 64-byte blocks (RFC 1321 section 3.4).
    Inputs:
      - state: (s0, s1, s2, s3) running state words
      - data: bytes-like, length a multiple of 64
    Returns:
      - the state after compressing every block in order
    """
    s0, s1, s2, s3 = state
    for off in range(0, len(data) - len(data) % BLOCK_SIZE, BLOCK_SIZE):
        m = struct.unpack_from("<16I", data, off)
        a, b, c, d = s0, s1, s2, s3
        for t in range(64):
            if t < 16:
                f = (b & c) | (~b & d)
            elif t < 32:
                f = (b & d) | (c & ~d)
            elif t < 48:
                f = b ^ c ^ d
            else:
                f = c ^ (b | ~d)
            tmp = (a + (f & MASK32) + AC[t] + m[WT[t]]) & MASK32
            a, d, c, b = d, c, b, (b + rl(tmp, RC[t])) & MASK32
        s0 = (s0 + a) & MASK32
        s1 = (s1 + b) & MASK32
        s2 = (s2 + c) & MASK32
        s3 = (s3 + d) & MASK32
    return (s0, s1, s2, s3)


def md5_padding(msg_len_bytes: int) -> bytes:
    bit_len = (msg_len_bytes * 8) & ((1 << 64) - 1)
    # 0x80 then zeros then length (little-endian 64-bit)
    pad = b"\x80"
    # k such that (msg_len + 1 + k) % 64 == 56
    k = (56 - (msg_len_bytes + 1) % 64) % 64
    pad += b"\x00" * k
    pad += bit_len.to_bytes(8, "little")
    return pad


def words_to_bytes_le(words: Iterable[int]) -> bytes:
    return b"".join(u32(w).to_bytes(4, "little") for w in words)
