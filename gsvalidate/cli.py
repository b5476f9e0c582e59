#!/usr/bin/env python3
"""
Command line interface for gsvalidate.

Usage:
    gsvalidate respond --key KEY --challenge CHALLENGE [--hex]
    gsvalidate challenge [--length N]
    gsvalidate verify --key KEY --challenge CHALLENGE --response TOKEN [--hex]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import GsValidateConfig, ConfigError, LOG_LEVELS
from .errors import ValidationError
from .protocol.challenge import ChallengeIssuer
from .protocol.response import generate, verify_response


EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog='gsvalidate',
                                     description='Secure/validate challenge responder')
    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')

    # Global options
    parser.add_argument('--config-dir', type=str, default=None,
                        help='Configuration directory (default: ~/.gsvalidate)')
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS, default=None,
                        help='Logging level (default: from settings, else WARNING)')

    respond_parser = subparsers.add_parser('respond', help='Compute the response to a challenge')
    _add_input_arguments(respond_parser)

    challenge_parser = subparsers.add_parser('challenge', help='Issue a random challenge')
    challenge_parser.add_argument('--length', type=int, default=None,
                                  help='Challenge length (default: from settings, else 6)')

    verify_parser = subparsers.add_parser('verify', help='Check a client response')
    _add_input_arguments(verify_parser)
    verify_parser.add_argument('--response', required=True,
                               help='Token returned by the client')

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--key', required=True, help='Shared secret key')
    parser.add_argument('--challenge', required=True, help='Server-issued challenge')
    parser.add_argument('--hex', action='store_true',
                        help='Treat key and challenge as hex strings')


def _decode_input(value: str, use_hex: bool) -> bytes:
    if use_hex:
        return bytes.fromhex(value)
    return value.encode('latin-1')


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line interface."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    try:
        config = GsValidateConfig.load(args.config_dir)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(level=args.log_level or config.log_level,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.command == 'challenge':
            if args.length is not None:
                config.update(challenge_length=args.length)
            issuer = ChallengeIssuer.from_config(config)
            print(issuer.issue().decode('ascii'))
            return EXIT_OK

        key = _decode_input(args.key, args.hex)
        challenge = _decode_input(args.challenge, args.hex)

        if args.command == 'respond':
            print(generate(key, challenge))
            return EXIT_OK

        if args.command == 'verify':
            if verify_response(key, challenge, args.response):
                print("OK")
                return EXIT_OK
            print("MISMATCH")
            return EXIT_MISMATCH

    except (ValidationError, ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (ValueError, UnicodeEncodeError) as e:
        print(f"error: invalid input: {e}", file=sys.stderr)
        return EXIT_ERROR

    parser.print_help()
    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
