"""Command-line interface for notp."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from notp import hotp, totp
from notp.errors import ConfigurationError, NotpError
from notp.options import Options


def _secret(args: argparse.Namespace) -> bytes:
    if args.hex:
        try:
            return bytes.fromhex(args.secret)
        except ValueError as e:
            raise ConfigurationError(f"Secret is not valid hex: {e}") from e
    return args.secret.encode("utf-8")


def gen_command(args: argparse.Namespace) -> int:
    """Handle the gen command."""
    try:
        options = Options(digits=args.digits, step=args.step)
        secret = _secret(args)
        if args.counter is not None:
            code = hotp.gen(secret, args.counter, options)
        else:
            code = totp.gen(secret, options)
        print(code)
        return 0
    except NotpError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2


def verify_command(args: argparse.Namespace) -> int:
    """Handle the verify command."""
    try:
        options = Options(digits=args.digits, window=args.window, step=args.step)
        secret = _secret(args)
        if args.counter is not None:
            result = hotp.verify(args.token, secret, args.counter, options)
        else:
            result = totp.verify(args.token, secret, options)
    except NotpError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2

    if result is None:
        print("✗ invalid", file=sys.stderr)
        return 1
    print(f"✓ valid (delta: {result.delta})")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "secret",
        help="Shared secret (UTF-8 text, or hex with --hex)",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        help="Interpret the secret as hex-encoded bytes",
    )
    parser.add_argument(
        "--counter",
        "-c",
        type=int,
        default=None,
        help="HOTP counter; omit to use TOTP",
    )
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=6,
        help="Number of digits in the code (default: 6)",
    )
    parser.add_argument(
        "--step",
        "-s",
        type=int,
        default=30,
        help="TOTP time step in seconds (default: 30)",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="HOTP/TOTP one-time password generator and verifier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Gen command
    gen_parser = subparsers.add_parser(
        "gen",
        aliases=["generate", "code"],
        help="Generate a one-time password",
    )
    _add_common_arguments(gen_parser)

    # Verify command
    verify_parser = subparsers.add_parser(
        "verify",
        aliases=["check"],
        help="Verify a one-time password",
    )
    verify_parser.add_argument("token", help="Code to verify")
    _add_common_arguments(verify_parser)
    verify_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=None,
        help="Counters to search either side (default: HOTP 50, TOTP 6)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.command in ("gen", "generate", "code"):
        return gen_command(args)
    elif args.command in ("verify", "check"):
        return verify_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
