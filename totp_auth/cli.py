"""Command line front end.

Usage:
    totp-auth generate                       (print a new secret)
    totp-auth code SECRET [TIMESTAMP]        (print code, default now)
    totp-auth validate SECRET CODE [TIMESTAMP]
    totp-auth --debug ...                    (debug logging)
"""

import argparse
import logging
import time
from typing import Optional, Sequence

from .authenticator import AuthKey, Authenticator
from .config import Base, load_config
from .errors import AuthError
from .totp import format_code

log = logging.getLogger(__name__)

# Colors
GREEN = "\033[32m"
RED = "\033[31m"
NC = "\033[0m"

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _code(value: str) -> int:
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"invalid code: {value!r}")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--base", choices=[b.value for b in Base], help="Secret encoding")
    common.add_argument("--bits", type=int, help="Secret length in bits (generate)")
    common.add_argument("--digits", type=int, help="Code length")
    common.add_argument("--step", type=int, help="Time step in seconds")
    common.add_argument("--window", type=int, help="Number of time steps accepted (odd)")
    common.add_argument("--debug", action="store_true", help="Enable debug output")

    parser = argparse.ArgumentParser(
        prog="totp-auth",
        description="Google Authenticator compatible TOTP codes",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("generate", parents=[common], help="Generate a new secret")

    code = sub.add_parser("code", parents=[common], help="Print the code for a secret")
    code.add_argument("secret", help="Encoded secret")
    code.add_argument("timestamp", nargs="?", type=int, help="Unix timestamp (default: now)")

    validate = sub.add_parser("validate", parents=[common], help="Check a code against a secret")
    validate.add_argument("secret", help="Encoded secret")
    validate.add_argument("code", type=_code, help="Code to check")
    validate.add_argument("timestamp", nargs="?", type=int, help="Unix timestamp (default: now)")

    return parser


def _config_from_args(args):
    config = load_config()
    overrides = {
        "base": args.base,
        "secret_bits": args.bits,
        "code_digits": args.digits,
        "window_timestep_size": args.step,
        "window_size": args.window,
    }
    return config.replace(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        auth = Authenticator(_config_from_args(args))
        log.debug(f"Using {auth.config}")

        if args.command == "generate":
            print(auth.create_credentials())
            return EXIT_OK

        timestamp = args.timestamp if args.timestamp is not None else int(time.time())
        key = AuthKey(args.secret)

        if args.command == "code":
            print(format_code(auth.config, auth.code_at(key, timestamp)))
            return EXIT_OK

        if auth.validate_code(key, timestamp, args.code):
            print(f"{GREEN}valid{NC}")
            return EXIT_OK
        print(f"{RED}invalid{NC}")
        return EXIT_INVALID
    except AuthError as e:
        print(f"{RED}Error: {e}{NC}")
        return EXIT_ERROR
