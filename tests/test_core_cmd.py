import sys
import tempfile
import unittest
from pathlib import Path

from toolchain.core_cmd import run_cmd, which_or_raise


class TestCoreCmd(unittest.TestCase):
    def test_run_cmd_captures_output_and_exit_code(self) -> None:
        res = run_cmd([sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"])

        self.assertEqual(3, res.exit_code)
        self.assertFalse(res.ok)
        self.assertEqual("out\n", res.stdout)
        self.assertEqual("err", res.stderr_tail())
        self.assertGreaterEqual(res.elapsed_seconds, 0)

    def test_run_cmd_merges_env(self) -> None:
        res = run_cmd(
            [sys.executable, "-c", "import os; print(os.environ['WASM_LOCATE_TEST_VAR'])"],
            env={"WASM_LOCATE_TEST_VAR": "hello"},
        )
        self.assertTrue(res.ok)
        self.assertEqual("hello", res.stdout.strip())

    def test_stderr_tail_keeps_last_lines(self) -> None:
        res = run_cmd([sys.executable, "-c", "import sys; [print(i, file=sys.stderr) for i in range(30)]"])
        self.assertEqual([str(i) for i in range(25, 30)], res.stderr_tail(5).splitlines())

    def test_which_or_raise(self) -> None:
        self.assertEqual(sys.executable, which_or_raise(sys.executable))
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                which_or_raise(str(Path(td) / "definitely-not-a-real-binary-xyz"))

    def test_output_is_decoded_as_utf8(self) -> None:
        code = (
            "import sys; "
            "sys.stdout.buffer.write(\"caf\\u00e9\".encode(\"utf-8\")); "
            "sys.stderr.buffer.write(b\"bad \\xff byte\")"
        )
        res = run_cmd([sys.executable, "-c", code])
        self.assertEqual("caf\u00e9", res.stdout)
        self.assertEqual("bad \ufffd byte", res.stderr)

    def test_undecodable_stdout_raises(self) -> None:
        with self.assertRaises(UnicodeDecodeError):
            run_cmd([sys.executable, "-c", "import sys; sys.stdout.buffer.write(b\"\\xff\\xfe\")"])


if __name__ == "__main__":
    unittest.main()
