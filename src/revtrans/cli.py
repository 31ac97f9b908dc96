"""Command line front end: convert a Revelation file to Secrets CSV."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from getpass import getpass

from . import __version__
from .exceptions import RevtransError
from .vault import Vault
from .writers import SecretsCsvWriter

EXIT_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="revtrans",
        description="Transform a Revelation password file into Secrets CSV.",
    )
    parser.add_argument("input", help="Path to the Revelation file")
    parser.add_argument(
        "--input-format",
        choices=("plain", "encrypted"),
        default="encrypted",
        help="Input format to read (default: encrypted)",
    )
    parser.add_argument(
        "--password",
        help=(
            "Password to use for decryption. Supplying it on the command line "
            "is discouraged; you will be asked for one if needed."
        ),
    )
    parser.add_argument(
        "--output",
        help="Write output to a new file instead of stdout",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        if args.input_format == "plain":
            vault = Vault.open_plain(args.input)
        else:
            password = args.password or getpass("Password: ")
            vault = Vault.open(args.input, password)

        with vault:
            writer = SecretsCsvWriter(vault.entries)
            if args.output:
                writer.save(args.output)
            else:
                writer.save(sys.stdout)
    except (RevtransError, OSError) as exc:
        print(exc, file=sys.stderr)
        return EXIT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
