# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from metamodel.app import reproject_document
from metamodel.config import (
    ConfigurationError,
    GraphSettings,
    TypeNaming,
    configure_logging,
    get_graph_settings,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rebuild a JSON:API document through a deduplicated resource graph"
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Document to read, '-' for standard input (default: %(default)s)",
    )
    parser.add_argument(
        "--include",
        type=str,
        help="Relationship paths to include, e.g. 'author,comments.author'",
    )
    parser.add_argument(
        "--fields",
        action="append",
        default=[],
        metavar="TYPE=KEYS",
        help="Sparse fieldset for one type, e.g. 'post=title,author' (repeatable)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation of the JSON output (default: %(default)s)",
    )
    parser.add_argument(
        "--verbatim-types",
        action="store_true",
        help="Write resource types as they appear in the input instead of pluralizing",
    )
    parser.add_argument(
        "--max-resources",
        type=int,
        help="Maximum number of distinct resources to index (overrides config)",
    )
    parser.add_argument(
        "--max-included",
        type=int,
        help="Maximum number of included resources to emit (overrides config)",
    )
    return parser.parse_args(list(argv))


def _parse_fieldsets(values: Sequence[str]) -> dict[str, str]:
    fieldsets: dict[str, str] = {}
    for value in values:
        type_name, separator, keys = value.partition("=")
        if not separator or not type_name.strip():
            raise ValueError(f"Invalid fieldset {value!r}, expected TYPE=KEYS")
        fieldsets[type_name.strip()] = keys
    return fieldsets


def _build_settings(args: argparse.Namespace) -> GraphSettings:
    settings = get_graph_settings()
    for name in ("max_resources", "max_included"):
        value = getattr(args, name)
        if value is not None and value <= 0:
            raise ValueError(f"--{name.replace('_', '-')} must be positive")
    return replace(
        settings,
        max_resources=args.max_resources or settings.max_resources,
        max_included=args.max_included or settings.max_included,
        type_naming=TypeNaming.VERBATIM if args.verbatim_types else settings.type_naming,
    )


def _read_document(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with Path(path).open(encoding="utf-8") as handle:
        return json.load(handle)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        settings = _build_settings(parsed_args)
        configure_logging(level=settings.log_level, force=True)
        fields = _parse_fieldsets(parsed_args.fields)
        document = _read_document(parsed_args.path)
    except (ValueError, OSError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = reproject_document(
            document,
            include=parsed_args.include,
            fields=fields,
            settings=settings,
        )
    except ValueError:
        log.exception("Invalid document")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reprojection")
        sys.exit(1)

    print(json.dumps(result, indent=parsed_args.indent or None))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
