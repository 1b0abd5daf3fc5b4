import contextlib
import io
import os
import unittest
from unittest import mock

from securepass import app, auth, config
from securepass.tokens import generate_one_time_auth_code

from .helpers import FAST

FAST_ENV = {
    "SECUREPASS_PRESET": "",
    "SECUREPASS_MEMORY_COST": str(FAST.memory_cost),
    "SECUREPASS_OPS_COST": str(FAST.ops_cost),
}


def run(argv, password=None):
    out = io.StringIO()
    with mock.patch.dict(os.environ, FAST_ENV), mock.patch("getpass.getpass", return_value=password):
        with contextlib.redirect_stdout(out):
            code = app.main(argv)
    return code, out.getvalue()


class CliTests(unittest.TestCase):
    def test_hash_then_verify(self):
        code, out = run(["hash"], password="SecurePass")
        self.assertEqual(code, 0)
        stored = out.strip()
        self.assertTrue(stored.startswith("$argon2id$v=19$m=64,t=1,p=1$"))

        code, out = run(["verify", stored], password="SecurePass")
        self.assertEqual((code, out.strip()), (0, "VALID"))

        code, out = run(["verify", stored], password="SecurePass2")
        self.assertEqual((code, out.strip()), (1, "INVALID"))

        code, out = run(["--memory-cost", "65536", "--ops-cost", "2", "verify", stored], password="SecurePass")
        self.assertEqual((code, out.strip()), (0, "VALID_NEEDS_REHASH"))

    def test_verify_unrecognized_hash(self):
        code, out = run(["verify", "$2b$12$abcdefghijklmnopqrstuv"], password="pw")
        self.assertEqual((code, out.strip()), (1, "INVALID_OR_UNRECOGNIZED"))

    def test_library_errors_are_reported(self):
        code, out = run(["--memory-cost", "1", "hash"], password="pw")
        self.assertEqual(code, 2)
        self.assertIn("FAIL:", out)

        code, out = run(["hash"], password="")
        self.assertEqual(code, 2)
        self.assertIn("password", out)

    def test_ota_code_and_verify(self):
        code, out = run(["ota-code", "reset:user-42"])
        self.assertEqual(code, 0)
        lines = dict(line.split("=", 1) for line in out.strip().splitlines())

        code, out = run(["ota-verify", lines["code"], lines["key"]])
        self.assertEqual(code, 0)
        self.assertIn("OK", out)

    def test_ota_verify_rejects_other_key(self):
        issued = generate_one_time_auth_code(b"msg")
        other = generate_one_time_auth_code(b"msg")
        code, out = run(["ota-verify", issued.code, other.key.hex()])
        self.assertEqual(code, 1)
        self.assertIn("FAIL", out)

        code, out = run(["ota-verify", issued.code, "not-hex"])
        self.assertEqual(code, 2)

        code, out = run(["ota-verify", "garbage", issued.key.hex()])
        self.assertEqual(code, 2)

    def test_bench_rejects_non_positive_rounds(self):
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                run(["bench", "--rounds", "0"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("must be greater than 0", err.getvalue())

    def test_cost_options_ignore_the_environment(self):
        bad_env = {"SECUREPASS_PRESET": "paranoid", "SECUREPASS_OPS_COST": "lots"}
        with mock.patch.dict(os.environ, bad_env):
            args = app.build_parser().parse_args(["--preset", "moderate", "hash"])
            self.assertEqual(app._configuration(args), config.PRESETS["moderate"])

            args = app.build_parser().parse_args(["--ops-cost", "3", "hash"])
            self.assertEqual(app._configuration(args), config.HashingConfiguration.create(ops_cost=3))

    def test_environment_used_without_cost_options(self):
        with mock.patch.dict(os.environ, FAST_ENV):
            args = app.build_parser().parse_args(["hash"])
            self.assertEqual(app._configuration(args), FAST)

    def test_bench(self):
        code, out = run(["bench", "--rounds", "1"])
        self.assertEqual(code, 0)
        self.assertIn("hash_median_ms", out)


if __name__ == "__main__":
    unittest.main()
