"""Command-line front end for Depot.

Usage: depot [-nsv] <action> <key>
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Callable, Mapping, Optional, Sequence

from depot.core.exceptions import (
    CryptoError,
    DepotError,
    InvalidInputError,
    NotFoundError,
    PasswordRequiredError,
    StorageError,
)
from depot.frontend.cli.context import AppContext, build_context
from depot.frontend.cli.logging_config import configure_logging

logger = logging.getLogger(__name__)

ACT_STOW = "stow"
ACT_FETCH = "fetch"
ACT_DROP = "drop"
ACT_LIST = "list"
ACT_HELP = "help"
KEYED_ACTIONS = (ACT_STOW, ACT_FETCH, ACT_DROP)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_NOT_FOUND = 3
EXIT_BAD_PASSWORD = 4
EXIT_STORAGE = 5

EPILOG = """\
actions:
  stow        read a value from stdin and associate it with the given key
  fetch       print the value associated with the given key to stdout
  drop        remove the given key from the depot
  list        print every stored key, one per line

environment variables:
  DEPOT_PATH  path to the depot's database
              (defaults to $XDG_CONFIG_HOME/depot/depot.db)
  DEPOT_PASS  password used to encrypt/decrypt values
              (be careful with this, it is less secure than the prompt)
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depot",
        description="A key-value store with optional encryption.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "action",
        choices=(ACT_STOW, ACT_FETCH, ACT_DROP, ACT_LIST, ACT_HELP),
        metavar="action",
        help="one of: stow, fetch, drop, list, help",
    )
    parser.add_argument("key", nargs="?", help="the key to act on")
    parser.add_argument(
        "-n",
        "--no-newline",
        action="store_true",
        help="do not print a newline after a fetched value",
    )
    parser.add_argument(
        "-s",
        "--secret",
        action="store_true",
        help="the provided value is secret and will be encrypted",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug output to stderr"
    )
    return parser


def read_value(stdin, secret: bool, prompt: Callable[[str], str]) -> bytes:
    """Read one value from stdin; hidden input for secrets typed at a terminal."""
    try:
        if secret and stdin.isatty():
            line = prompt("VALUE: ")
        else:
            line = stdin.readline()
        value = line.strip().encode("utf-8")
    except UnicodeError:
        raise InvalidInputError("value must be valid UTF-8 text") from None

    if not value:
        raise InvalidInputError("value must be a non-empty string")
    return value


def write_value(stdout, value: bytes, newline: bool) -> None:
    data = value + b"\n" if newline else value
    buffer = getattr(stdout, "buffer", None)
    if buffer is not None:
        stdout.flush()
        buffer.write(data)
        buffer.flush()
        return

    # text-only stream: refuse rather than mangle bytes that are not UTF-8
    try:
        stdout.write(data.decode("utf-8"))
    except UnicodeDecodeError:
        raise InvalidInputError("value is not UTF-8 text and stdout accepts only text") from None


def run(args: argparse.Namespace, ctx: AppContext, stdin, stdout) -> None:
    """Perform the single action requested on the command line."""
    depot = ctx.depot

    if args.action == ACT_STOW:
        value = read_value(stdin, args.secret, ctx.prompt)
        password = ctx.get_password() if args.secret else None
        depot.stow(args.key, value, secret=args.secret, password=password)
    elif args.action == ACT_FETCH:
        try:
            value = depot.fetch(args.key)
        except PasswordRequiredError:
            value = depot.fetch(args.key, ctx.get_password())
        write_value(stdout, value, newline=not args.no_newline)
    elif args.action == ACT_DROP:
        depot.drop(args.key)
    elif args.action == ACT_LIST:
        for key in depot.keys():
            stdout.write(key + "\n")


def exit_code_for(error: DepotError) -> int:
    if isinstance(error, NotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, CryptoError):
        return EXIT_BAD_PASSWORD
    if isinstance(error, StorageError):
        return EXIT_STORAGE
    if isinstance(error, InvalidInputError):
        return EXIT_USAGE
    return EXIT_ERROR


def main(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    stdin=None,
    stdout=None,
    stderr=None,
    prompt: Callable[[str], str] = getpass.getpass,
) -> int:
    """Entry point; returns the process exit code."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.action == ACT_HELP:
        parser.print_help(stdout)
        return EXIT_OK
    if args.action in KEYED_ACTIONS and not args.key:
        parser.error("no key specified")
    if args.action == ACT_LIST and args.key:
        parser.error("list takes no key")

    configure_logging(logging.DEBUG if args.verbose else None)

    ctx = None
    try:
        ctx = build_context(env, prompt=prompt)
        logger.debug("%s %r on %s", args.action, args.key, ctx.db_path)
        run(args, ctx, stdin, stdout)
    except DepotError as e:
        stderr.write(f"depot: error: {e}\n")
        return exit_code_for(e)
    finally:
        if ctx is not None:
            ctx.close()

    return EXIT_OK


def entrypoint() -> None:
    sys.exit(main())
