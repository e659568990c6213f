"""
cli.py - ``provider-schema`` command line
=========================================

Validate a provider-definition file and report every problem in it, or print
a Markdown summary of the resolved definition.

```
provider-schema check    -c blastdom.json [--format table]
provider-schema describe -c blastdom.yaml --heading-level 3
```

Exit codes: 0 on success, 2 when the file is missing, unreadable or invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

from . import __version__
from .definition import ProviderDefinition
from .loader import SUPPORTED_SUFFIXES, load_document
from .report import errors_frame, format_errors, to_markdown_card
from .schema import ROOT_PATH, validate_provider_definition
from .validator import CombinatorError, SchemaError

__all__ = ["build_arg_parser", "main"]

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="provider-schema",
        description="Validate component provider definitions.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = p.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-c", "--config",
        metavar="FILE",
        required=True,
        help=f"Provider definition file ({', '.join(SUPPORTED_SUFFIXES)}).",
    )

    check = sub.add_parser("check", parents=[common], help="Validate a definition and list every error.")
    check.add_argument(
        "--format",
        choices=("text", "table"),
        default="text",
        help="Error listing style: ' - message' lines or a path/message/expected/value table.",
    )

    describe = sub.add_parser("describe", parents=[common], help="Print a Markdown summary.")
    describe.add_argument("--heading-level", type=int, default=2, help="Markdown heading level.")

    return p

# --------------------------------------------------------------------------- #
# Commands                                                                    #
# --------------------------------------------------------------------------- #

def _load(path: Path, stderr: TextIO) -> tuple[bool, Any]:
    """Return ``(loaded, document)``; a failure is reported on *stderr*.

    A file may legitimately hold ``null``, so success is flagged separately
    and such a document still goes through validation.
    """
    if not path.is_file():
        stderr.write(f'Configuration file "{path}" not found.\n')
        return False, None
    try:
        return True, load_document(path)
    except (OSError, ValueError) as exc:
        log.debug("could not load %s", path, exc_info=True)
        stderr.write(f"{exc}\n")
        return False, None


def _check(document, path: Path, fmt: str, stdout: TextIO, stderr: TextIO) -> int:
    result = validate_provider_definition(document, ROOT_PATH)
    if result.valid:
        stdout.write(f"OK: {document['name']} {document['version']}\n")
        return EXIT_OK

    log.info("%s: %d validation error(s)", path, len(result.errors))
    stderr.write(f'Error while trying to parse provider definition "{path}":\n\n')
    if fmt == "table":
        stderr.write(errors_frame(result).to_string(index=False) + "\n\n")
    else:
        stderr.write(format_errors(result) + "\n\n")
    return EXIT_INVALID


def _describe(document, path: Path, heading_level: int, stdout: TextIO, stderr: TextIO) -> int:
    try:
        definition = ProviderDefinition.from_document(document, ROOT_PATH)
    except SchemaError as exc:
        stderr.write(f'Error while trying to parse provider definition "{path}":\n\n')
        stderr.write(format_errors(exc.result) + "\n\n")
        return EXIT_INVALID
    except (ValueError, CombinatorError) as exc:
        stderr.write(f"{exc}\n")
        return EXIT_INVALID

    stdout.write(to_markdown_card(definition.describe(), heading_level=heading_level) + "\n")
    return EXIT_OK


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.verbose else "WARNING",
        format="%(asctime)s %(levelname)s %(message)s",
    )

    path = Path(args.config)
    loaded, document = _load(path, stderr)
    if not loaded:
        return EXIT_INVALID

    if args.command == "check":
        return _check(document, path, args.format, stdout, stderr)
    return _describe(document, path, args.heading_level, stdout, stderr)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
