import hashlib
import math
import unittest

from md5resume.core import AC, MD5_IV, RC, WT, block, md5_padding, words_to_bytes_le
from md5resume.md5 import md5_bytes, md5_hex


class TestMD5Core(unittest.TestCase):
    def test_md5_matches_hashlib(self) -> None:
        vectors = [
            b"",
            b"a",
            b"abc",
            b"message digest",
            b"abcdefghijklmnopqrstuvwxyz",
            b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
            b"1234567890" * 8,
        ]
        for m in vectors:
            self.assertEqual(md5_bytes(m), hashlib.md5(m).digest())
            self.assertEqual(md5_hex(m), hashlib.md5(m).hexdigest())

    def test_known_answers(self) -> None:
        self.assertEqual(md5_hex(b""), "d41d8cd98f00b204e9800998ecf8427e")
        self.assertEqual(md5_hex(b"abc"), "900150983cd24fb0d6963f7d28e17f72")

    def test_tables(self) -> None:
        self.assertEqual(len(AC), 64)
        self.assertEqual(AC[0], 0xD76AA478)
        self.assertEqual(AC[63], 0xEB86D391)
        for t in range(64):
            self.assertEqual(AC[t], int(abs(math.sin(t + 1)) * (1 << 32)) & 0xFFFFFFFF, t)
        self.assertEqual(RC[0:4], (7, 12, 17, 22))
        self.assertEqual(RC[60:64], (6, 10, 15, 21))

    def test_message_index_permutation(self) -> None:
        # RFC 1321 per-round word order: i, 5i+1, 3i+5, 7i (mod 16)
        expected = (
            [t for t in range(16)]
            + [(5 * t + 1) % 16 for t in range(16, 32)]
            + [(3 * t + 5) % 16 for t in range(32, 48)]
            + [(7 * t) % 16 for t in range(48, 64)]
        )
        self.assertEqual(list(WT), expected)
        for r in range(4):
            self.assertEqual(sorted(WT[16 * r : 16 * r + 16]), list(range(16)))

    def test_block_multi_equals_sequential(self) -> None:
        data = bytes((i * 7 + 3) & 0xFF for i in range(64 * 3))
        s = MD5_IV
        for off in range(0, len(data), 64):
            s = block(s, data[off : off + 64])
        self.assertEqual(block(MD5_IV, data), s)

    def test_block_empty_is_identity(self) -> None:
        self.assertEqual(block(MD5_IV, b""), MD5_IV)

    def test_padding_lengths(self) -> None:
        for n in (0, 1, 55, 56, 57, 63, 64, 119, 120):
            pad = md5_padding(n)
            self.assertEqual((n + len(pad)) % 64, 0)
            self.assertEqual(pad[0], 0x80)
            self.assertEqual(pad[-8:], (n * 8).to_bytes(8, "little"))
        self.assertEqual(len(md5_padding(55)), 9)
        self.assertEqual(len(md5_padding(56)), 72)

    def test_words_to_bytes_le(self) -> None:
        self.assertEqual(words_to_bytes_le(MD5_IV).hex(), "0123456789abcdeffedcba9876543210")


if __name__ == "__main__":
    unittest.main()
