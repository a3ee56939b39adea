import contextlib
import hashlib
import io
import tempfile
import unittest
from pathlib import Path

from md5resume.cli import main
from md5resume.state import decode_state


def _run(argv):
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        rc = main(argv)
    return rc, buf.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.data = bytes(range(256)) * 10 + b"tail"
        self.file = self.tmp / "input.bin"
        self.file.write_bytes(self.data)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_verify_core(self) -> None:
        rc, out = _run(["verify-core"])
        self.assertEqual(rc, 0)
        self.assertIn("verify-core: PASS", out)

    def test_sum(self) -> None:
        rc, out = _run(["sum", "--chunk-size", "100", str(self.file)])
        self.assertEqual(rc, 0)
        self.assertEqual(out.split()[0], hashlib.md5(self.data).hexdigest())

    def test_resume_from_saved_state(self) -> None:
        blob = self.tmp / "state.bin"
        rc, _ = _run(["sum", "-q", "--limit", "1000", "--state-out", str(blob), str(self.file)])
        self.assertEqual(rc, 0)
        self.assertEqual(decode_state(blob.read_bytes()).length, 1000)

        rc, out = _run(["sum", "--state-in", str(blob), str(self.file)])
        self.assertEqual(rc, 0)
        self.assertEqual(out.split()[0], hashlib.md5(self.data).hexdigest())

    def test_state_info(self) -> None:
        blob = self.tmp / "state.bin"
        _run(["sum", "-q", "--limit", "70", "--state-out", str(blob), str(self.file)])
        rc, out = _run(["state-info", str(blob)])
        self.assertEqual(rc, 0)
        self.assertIn("nx:     6", out)
        self.assertIn("length: 70", out)

    def test_bad_state(self) -> None:
        blob = self.tmp / "bad.bin"
        blob.write_bytes(b"nope")
        rc, out = _run(["state-info", str(blob)])
        self.assertEqual(rc, 1)
        self.assertIn("bad state", out)
        rc, out = _run(["sum", "--state-in", str(blob), str(self.file)])
        self.assertEqual(rc, 1)

    def test_missing_file(self) -> None:
        rc, out = _run(["sum", str(self.tmp / "missing.bin")])
        self.assertEqual(rc, 1)
        self.assertIn("sum:", out)

    def test_state_out_unwritable(self) -> None:
        target = self.tmp / "nodir" / "state.bin"
        rc, out = _run(["sum", "--state-out", str(target), str(self.file)])
        self.assertEqual(rc, 1)
        self.assertIn("sum:", out)
        self.assertFalse(target.exists())

    def test_missing_file_does_not_stop_others(self) -> None:
        rc, out = _run(["sum", str(self.tmp / "missing.bin"), str(self.file)])
        self.assertEqual(rc, 1)
        self.assertIn(f"{hashlib.md5(self.data).hexdigest()}  {self.file}", out)


if __name__ == "__main__":
    unittest.main()
