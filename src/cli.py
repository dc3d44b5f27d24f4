"""
Command-line interface for migrating Docusaurus v1 pages to v2.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from analyzer import DEFAULT_RULES, MigrationRules
from batch import BatchOptions, migrate_pages
from emitter import EmitOptions
from parser import ParseError
from transformer import TransformError, transform_source

logger = logging.getLogger(__name__)


def _print_diagnostics(messages: List[str]) -> None:
    if not messages:
        return
    for message in messages:
        sys.stderr.write(message + "\n")


def _emit_options(args: argparse.Namespace) -> EmitOptions:
    return EmitOptions(
        quote='"' if args.double_quotes else "'",
        trailing_comma=args.trailing_comma,
    )


def _rules(args: argparse.Namespace) -> MigrationRules:
    return MigrationRules(
        layout_name=args.layout_name,
        layout_source=args.layout_source,
    )


def convert_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    if not input_path.exists():
        sys.stderr.write(f"ERROR: Input file not found: {input_path}\n")
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"ERROR: Failed to read {input_path}: {exc}\n")
        return 1

    try:
        result = transform_source(
            source,
            source_name=str(input_path),
            rules=_rules(args),
            emit_options=_emit_options(args),
        )
    except ParseError as exc:
        sys.stderr.write(f"ERROR: Parsing failed: {exc}\n")
        return 1
    except TransformError as exc:
        sys.stderr.write(f"ERROR: Transformation failed: {exc}\n")
        return 1

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.source, encoding="utf-8")
        logger.info("Wrote %s", output_path)
    else:
        sys.stdout.write(result.source)

    if args.verbose:
        _print_diagnostics([f"INFO {input_path}: {message}" for message in result.diagnostics])
    return 0


def migrate_pages_command(args: argparse.Namespace) -> int:
    options = BatchOptions(
        copy_assets=not args.no_copy_assets,
        fail_fast=args.fail_fast,
        rules=_rules(args),
        emit_options=_emit_options(args),
    )
    try:
        report = migrate_pages(args.source, args.dest, options=options)
    except FileNotFoundError as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return 1
    except (ParseError, TransformError) as exc:
        sys.stderr.write(f"ERROR: Migration aborted: {exc}\n")
        return 1

    # Failures were already logged by the batch driver.
    if args.verbose:
        diagnostics: List[str] = []
        for outcome in report.transformed:
            diagnostics.extend(f"INFO {outcome.source}: {message}" for message in outcome.diagnostics)
        _print_diagnostics(diagnostics)

    return 0 if report.ok else 1


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--layout-name",
        default=DEFAULT_RULES.layout_name,
        help="Binding name of the layout component (default: %(default)s)",
    )
    parser.add_argument(
        "--layout-source",
        default=DEFAULT_RULES.layout_source,
        help="Module the layout component is imported from (default: %(default)s)",
    )
    parser.add_argument(
        "--double-quotes",
        action="store_true",
        help="Use double quotes in generated code.",
    )
    parser.add_argument(
        "--trailing-comma",
        action="store_true",
        help="Emit trailing commas in generated object literals.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="page-migrate", description="Migrate Docusaurus v1 pages to Docusaurus v2"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Show per-binding diagnostics.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report errors.")
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser("convert", help="Migrate a single page file")
    convert_parser.add_argument("input", help="Path to the legacy page")
    convert_parser.add_argument(
        "--out",
        help="Output file path (defaults to writing to stdout)",
    )
    _add_output_arguments(convert_parser)
    convert_parser.set_defaults(func=convert_command)

    pages_parser = subparsers.add_parser(
        "migrate-pages", help="Migrate every page below a directory"
    )
    pages_parser.add_argument("source", help="Legacy pages directory, e.g. website/pages/en")
    pages_parser.add_argument("dest", help="Destination directory, e.g. src/pages")
    pages_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first page that fails to parse or transform.",
    )
    pages_parser.add_argument(
        "--no-copy-assets",
        action="store_true",
        help="Do not copy non-JavaScript files to the destination.",
    )
    _add_output_arguments(pages_parser)
    pages_parser.set_defaults(func=migrate_pages_command)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    _configure_logging(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
