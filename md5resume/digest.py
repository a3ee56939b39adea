from __future__ import annotations

from typing import Callable, List, Tuple

from .core import BLOCK_SIZE, MD5_IV, SIZE, block, words_to_bytes_le
from .numba_block import block_numba, numba_available
from .state import DigestState, decode_state, encode_state

BlockFunc = Callable[[Tuple[int, int, int, int], bytes], Tuple[int, int, int, int]]

MASK64 = 0xFFFFFFFFFFFFFFFF

ENGINES = ("python", "numba", "auto")


def select_block(engine: str) -> BlockFunc:
    if engine == "auto":
        engine = "numba" if numba_available() else "python"
    if engine == "python":
        return block
    if engine == "numba":
        if not numba_available():
            raise RuntimeError("numba engine requested but numba is not available")
        return block_numba
    raise ValueError(f"unknown engine {engine!r}, want one of {ENGINES}")


class Digest:
    """Streaming MD5 whose full internal state can be exported and restored.

    The engine holds the four running state words, a 64-byte input buffer
    with ``nx`` valid bytes, and the total number of bytes written. ``sum``
    finalizes a copy, so writing may continue afterwards.
    """

    name = "md5"
    digest_size = SIZE

    def __init__(self, engine: str = "python") -> None:
        self._engine = engine
        self._block = select_block(engine)
        self._s: List[int] = list(MD5_IV)
        self._x = bytearray(BLOCK_SIZE)
        self._nx = 0
        self._len = 0

    @property
    def engine(self) -> str:
        return self._engine

    @property
    def length(self) -> int:
        return self._len

    @property
    def size(self) -> int:
        return SIZE

    @property
    def block_size(self) -> int:
        return BLOCK_SIZE

    def reset(self) -> None:
        self._s = list(MD5_IV)
        self._nx = 0
        self._len = 0

    def _compress(self, data) -> None:
        self._s = list(self._block(tuple(self._s), data))

    def write(self, data) -> int:
        p = memoryview(data).cast("B")
        nn = len(p)
        if self._nx >= BLOCK_SIZE:
            raise AssertionError(f"buffer count {self._nx} out of range")
        self._len = (self._len + nn) & MASK64
        if self._nx > 0:
            n = min(nn, BLOCK_SIZE - self._nx)
            self._x[self._nx : self._nx + n] = p[:n]
            self._nx += n
            if self._nx == BLOCK_SIZE:
                self._compress(self._x)
                self._nx = 0
            p = p[n:]
        if len(p) >= BLOCK_SIZE:
            n = len(p) - len(p) % BLOCK_SIZE
            self._compress(p[:n])
            p = p[n:]
        if len(p) > 0:
            self._x[: len(p)] = p
            self._nx = len(p)
        return nn

    def update(self, data) -> None:
        self.write(data)

    def copy(self) -> "Digest":
        d = Digest.__new__(Digest)
        d._engine = self._engine
        d._block = self._block
        d._s = list(self._s)
        d._x = bytearray(self._x)
        d._nx = self._nx
        d._len = self._len
        return d

    def sum(self, prefix: bytes = b"") -> bytes:
        # Work on a copy so the caller can keep writing and summing.
        d = self.copy()
        return bytes(prefix) + d._checksum()

    def digest(self) -> bytes:
        return self.sum()

    def hexdigest(self) -> str:
        return self.sum().hex()

    def _checksum(self) -> bytes:
        # Padding: a 1 bit and 0 bits until 56 bytes mod 64.
        length = self._len
        tmp = bytearray(64)
        tmp[0] = 0x80
        if length % 64 < 56:
            self.write(tmp[0 : 56 - length % 64])
        else:
            self.write(tmp[0 : 64 + 56 - length % 64])

        # Length in bits.
        self.write(((length << 3) & MASK64).to_bytes(8, "little"))

        if self._nx != 0:
            raise AssertionError(f"padding left {self._nx} bytes buffered")

        return words_to_bytes_le(self._s)

    def _snapshot(self) -> DigestState:
        return DigestState(
            words=(self._s[0], self._s[1], self._s[2], self._s[3]),
            buffer=bytes(self._x),
            nx=self._nx,
            length=self._len,
        )

    def get_state(self) -> bytes:
        return encode_state(self._snapshot())

    def set_state(self, blob: bytes) -> None:
        # decode fully before touching any field. nx is not range-checked:
        # a blob with nx >= 64 loads, but the next write refuses it.
        st = decode_state(blob)
        self._s = list(st.words)
        self._x = bytearray(st.buffer)
        self._nx = st.nx
        self._len = st.length


def new(engine: str = "python") -> Digest:
    return Digest(engine)


def new_from_state(state: bytes, engine: str = "python") -> Digest:
    d = Digest(engine)
    d.set_state(state)
    return d


def md5_sum(data: bytes) -> bytes:
    """MD5 checksum of ``data``."""
    d = Digest()
    d.write(data)
    return d._checksum()
