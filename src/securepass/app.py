"""
app.py - CLI entrypoint

Commands list:
- hash: prompt for a password and print its Argon2id hash string
- verify: prompt for a password and check it against a stored hash string
- ota-code: issue a one-time auth code and key for a message
- ota-verify: check a one-time auth code against its key
- bench: time hashing/verification for the current configuration or the presets

Cost parameters come from the --preset, --memory-cost and --ops-cost options.
When none of them is given, the environment (SECUREPASS_PRESET,
SECUREPASS_MEMORY_COST, SECUREPASS_OPS_COST) is used instead.
"""

from __future__ import annotations

import argparse
import getpass
import logging
from typing import List, Optional

from . import auth
from . import bench
from . import config
from .auth import VerificationResult
from .errors import SecurePassError
from .service import SecurePass

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s::%(name)s::%(levelname)s::%(message)s"


def _prompt_secret(prompt: str = "Password: ") -> str:
    return getpass.getpass(prompt)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return value


def _configuration(args: argparse.Namespace) -> config.HashingConfiguration:
    # the environment is only consulted when no cost option was given
    if args.preset is None and args.memory_cost is None and args.ops_cost is None:
        return config.load_configuration()

    cfg = config.preset(args.preset) if args.preset else config.HashingConfiguration.create()
    if args.memory_cost is not None:
        cfg = cfg.with_memory_cost(args.memory_cost)
    if args.ops_cost is not None:
        cfg = cfg.with_ops_cost(args.ops_cost)
    return cfg


def cmd_hash(args: argparse.Namespace) -> int:
    sp = SecurePass(_configuration(args))
    secret = _prompt_secret()

    hashed = sp.hash_password(secret)
    print(auth.encode_hash(hashed))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    sp = SecurePass(_configuration(args))
    stored_hash = auth.pad_hash(args.hash)
    secret = _prompt_secret()

    result = sp.verify_hash(secret, stored_hash)
    print(result.name)
    return 0 if result in (VerificationResult.VALID, VerificationResult.VALID_NEEDS_REHASH) else 1


def cmd_ota_code(args: argparse.Namespace) -> int:
    code, key = SecurePass.generate_one_time_auth_code(args.message.encode("utf-8"))
    print(f"code={code}")
    print(f"key={key.hex()}")
    return 0


def cmd_ota_verify(args: argparse.Namespace) -> int:
    try:
        key = bytes.fromhex(args.key)
    except ValueError:
        print("FAIL: key must be hex encoded")
        return 2

    ok = SecurePass.verify_one_time_auth_code(args.code, key)
    print("OK: code verified" if ok else "FAIL: code rejected")
    return 0 if ok else 1


def cmd_bench(args: argparse.Namespace) -> int:
    if args.presets:
        results = bench.bench_presets(rounds=args.rounds)
    else:
        results = [bench.bench_config(_configuration(args), rounds=args.rounds)]

    print("== ARGON2 BENCH ==")
    for r in results:
        print(r)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="securepass")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--preset", choices=sorted(config.PRESETS), help="Named cost preset")
    p.add_argument("--memory-cost", type=int, help="Argon2 memory cost in bytes")
    p.add_argument("--ops-cost", type=int, help="Argon2 operations (time) cost")

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("hash", help="Hash a password")
    s.set_defaults(func=cmd_hash)

    s = sub.add_parser("verify", help="Verify a password against a stored hash")
    s.add_argument("hash", help="Encoded hash string, e.g. $argon2id$v=19$...")
    s.set_defaults(func=cmd_verify)

    s = sub.add_parser("ota-code", help="Issue a one-time auth code for a message")
    s.add_argument("message")
    s.set_defaults(func=cmd_ota_code)

    s = sub.add_parser("ota-verify", help="Verify a one-time auth code")
    s.add_argument("code")
    s.add_argument("key", help="Hex encoded key printed by ota-code")
    s.set_defaults(func=cmd_ota_verify)

    s = sub.add_parser("bench", help="Run benchmarks")
    s.add_argument("--rounds", type=_positive_int, default=5)
    s.add_argument("--presets", action="store_true", help="Benchmark every named preset")
    s.set_defaults(func=cmd_bench)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        return args.func(args)
    except SecurePassError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"FAIL: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
