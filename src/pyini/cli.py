from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any

import yaml

from . import __version__
from .errors import IniError
from .loader import load_store
from .operations import (
    EXIT_NOFILE,
    EXIT_OK,
    Exists,
    GrepKeys,
    GrepValues,
    ListAllKeys,
    ListKeys,
    ListSections,
    Operation,
    Outcome,
    Print,
    run,
)
from .settings import FORMATS, load_settings

logger = logging.getLogger(__name__)

EPILOG = """\
In the case that the INI-FILE doesn't exist, return 1. A KEY is a string of
the format SECTION:KEY, matched case-insensitively. Colons in SECTION and KEY
must be escaped with a backslash. Regexes are case-insensitive and don't have
captures enabled. The first operation given wins; later ones are ignored.
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_NOFILE, f"{self.prog}: error: {message}\n")


class _OperationAction(argparse.Action):
    """Record the first operation flag seen and ignore the rest."""

    def __init__(self, option_strings, dest, factory: Callable[..., Operation], **kwargs):
        self.factory = factory
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            logger.debug("Ignoring %s: an operation was already selected", option_string)
            return
        setattr(namespace, self.dest, self.factory() if values == [] else self.factory(values))


def _add_operation(parser: argparse.ArgumentParser, *flags: str, factory, metavar=None, help=None):
    kwargs: dict[str, Any] = {"nargs": 0} if metavar is None else {"metavar": metavar}
    parser.add_argument(
        *flags, dest="operation", action=_OperationAction, factory=factory, help=help, **kwargs
    )


def build_parser(prog: str = "ini") -> argparse.ArgumentParser:
    parser = _Parser(
        prog=prog,
        description="Examine INI files from the command line.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ops = parser.add_argument_group("operations")
    _add_operation(ops, "-s", "--list-sections", factory=ListSections, help="List INI sections")
    _add_operation(ops, "-k", "--list-keys", factory=ListKeys, metavar="SEC",
                   help="List keys in section SEC")
    _add_operation(ops, "-a", "--list-all-keys", factory=ListAllKeys, help="List all keys")
    _add_operation(ops, "-e", "--exists", factory=Exists, metavar="KEY",
                   help="Test if KEY exists, return 0 if it does, otherwise return 2")
    _add_operation(ops, "-p", "--print", factory=Print, metavar="KEY",
                   help="Print the value associated with KEY and return 0, "
                        "otherwise print nothing and return 2")
    _add_operation(ops, "-g", "--grep", factory=lambda rx: GrepKeys(rx, False), metavar="REGEX",
                   help="List all keys matching the given POSIX basic regex")
    _add_operation(ops, "-G", "--egrep", factory=lambda rx: GrepKeys(rx, True), metavar="REGEX",
                   help="List all keys matching the given extended regex")
    _add_operation(ops, "-r", "--grep-values", factory=lambda rx: GrepValues(rx, False),
                   metavar="REGEX", help="List all keys whose value matches the given basic regex")
    _add_operation(ops, "-R", "--egrep-values", factory=lambda rx: GrepValues(rx, True),
                   metavar="REGEX",
                   help="List all keys whose value matches the given extended regex")

    parser.add_argument("--strict", dest="strict", action="store_true", default=None,
                        help="Reject malformed lines instead of ignoring them")
    parser.add_argument("--lenient", dest="strict", action="store_false", default=None,
                        help="Ignore malformed lines (default)")
    parser.add_argument("--encoding", default=None, help="Encoding of INI-FILE (default utf-8)")
    parser.add_argument("--as", dest="format", choices=FORMATS, default=None,
                        help="Output format (default lines)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", type=Path, metavar="INI-FILE")
    return parser


def configure_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _report(exc: IniError) -> None:
    print(str(exc), file=sys.stderr)


def write_outcome(outcome: Outcome, fmt: str, out: IO[str]) -> None:
    if outcome.items is None:
        return
    data: Any = list(outcome.items)
    if outcome.single:
        data = data[0] if data else None
    if fmt == "json":
        print(json.dumps(data), file=out)
    elif fmt == "yaml":
        out.write(yaml.safe_dump(data, default_flow_style=False, allow_unicode=True))
    else:
        for item in outcome.items:
            print(item, file=out)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    settings = load_settings()
    configure_logging(settings.log_level, args.verbose)
    strict = settings.strict if args.strict is None else args.strict
    fmt = args.format or settings.format

    try:
        store = load_store(args.file, strict=strict, encoding=args.encoding or settings.encoding)
    except IniError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return EXIT_NOFILE

    if args.operation is None:
        return EXIT_OK
    outcome = run(args.operation, store, on_error=_report)
    write_outcome(outcome, fmt, sys.stdout)
    return outcome.status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
