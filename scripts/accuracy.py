#!/usr/bin/env python3
"""Accuracy checks for the streaming engine and state transfer."""
from __future__ import annotations

import argparse
import hashlib
import random
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5resume.digest import Digest, new_from_state
from md5resume.md5 import md5_hex
from md5resume.numba_block import numba_available


def check_md5_vectors() -> bool:
    vectors = [
        b"",
        b"a",
        b"abc",
        b"message digest",
        b"abcdefghijklmnopqrstuvwxyz",
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    ]
    ok = True
    for msg in vectors:
        ours = md5_hex(msg)
        ref = hashlib.md5(msg).hexdigest()
        if ours != ref:
            print(f"MD5 mismatch: {msg!r} ours={ours} ref={ref}")
            ok = False
    print(f"md5_vectors: {'PASS' if ok else 'FAIL'}")
    return ok


def check_random_chunking(trials: int, seed: int, engine: str) -> bool:
    rng = random.Random(seed)
    fails = 0
    for _ in range(trials):
        msg = rng.randbytes(rng.randrange(0, 2048))
        d = Digest(engine=engine)
        off = 0
        while off < len(msg):
            n = rng.randrange(0, 200)
            d.write(msg[off : off + n])
            off += n
        if d.sum() != hashlib.md5(msg).digest():
            fails += 1
    ok = fails == 0
    print(f"random_chunking[{engine}]: {'PASS' if ok else 'FAIL'} fails={fails}/{trials}")
    return ok


def check_state_resume(trials: int, seed: int) -> bool:
    rng = random.Random(seed)
    fails = 0
    for _ in range(trials):
        msg = rng.randbytes(rng.randrange(1, 2048))
        split = rng.randrange(0, len(msg))
        d = Digest()
        d.write(msg[:split])
        r = new_from_state(d.get_state())
        r.write(msg[split:])
        if r.sum() != hashlib.md5(msg).digest():
            fails += 1
    ok = fails == 0
    print(f"state_resume: {'PASS' if ok else 'FAIL'} fails={fails}/{trials}")
    return ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--trials", type=int, default=200)
    ap.add_argument("--seed", type=int, default=123)
    args = ap.parse_args()

    ok = True
    ok &= check_md5_vectors()
    ok &= check_random_chunking(args.trials, args.seed, "python")
    if numba_available():
        ok &= check_random_chunking(args.trials, args.seed, "numba")
    ok &= check_state_resume(args.trials, args.seed)

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
