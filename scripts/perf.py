#!/usr/bin/env python3
"""Throughput micro-benchmarks for the compression engines."""
from __future__ import annotations

import argparse
import os
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5resume.digest import Digest
from md5resume.numba_block import numba_available


def bench_engine(engine: str, data: bytes, chunk: int, rounds: int) -> None:
    # warm-up so JIT compilation is not timed
    Digest(engine=engine).write(data[:4096])
    start = time.time()
    for _ in range(rounds):
        d = Digest(engine=engine)
        for off in range(0, len(data), chunk):
            d.write(data[off : off + chunk])
        d.sum()
    elapsed = time.time() - start
    mb = len(data) * rounds / (1 << 20)
    rate = mb / elapsed if elapsed else 0.0
    print(f"{engine}: size={len(data)} chunk={chunk} rounds={rounds} time={elapsed:.3f}s rate={rate:.2f} MiB/s")


def bench_state_transfer(count: int) -> None:
    d = Digest()
    d.write(b"x" * 1000)
    start = time.time()
    for _ in range(count):
        d.set_state(d.get_state())
    elapsed = time.time() - start
    rate = count / elapsed if elapsed else 0.0
    print(f"state_transfer: count={count} time={elapsed:.3f}s rate={rate:.2f}/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=1 << 20)
    ap.add_argument("--chunk", type=int, default=1 << 16)
    ap.add_argument("--rounds", type=int, default=3)
    ap.add_argument("--transfers", type=int, default=10000)
    args = ap.parse_args()

    data = os.urandom(args.size)
    bench_engine("python", data, args.chunk, args.rounds)
    if numba_available():
        bench_engine("numba", data, args.chunk, args.rounds)
    else:
        print("numba: not available, skipped")
    bench_state_transfer(args.transfers)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
