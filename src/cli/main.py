"""csvjson CLI entry points.
This module exposes the convert and run-spec commands.
It maps argparse commands onto SDK calls and process exit codes.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from convert.client import CsvJsonClient
from core.config import CsvJsonConfig
from core.constants import SUPPORTED_DELIMITERS
from core.errors import CsvJsonError
from core.run_spec_execution import format_result_line


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="csvjson",
        description="Stream CSV files into JSON arrays",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_convert_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the csvjson CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = CsvJsonClient(CsvJsonConfig.from_env())
        if args.command == "convert":
            return _run_convert_command(client, args)
        if args.command == "run-spec":
            return run_run_spec_command(client, args)
    except CsvJsonError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser("convert", help="Convert one CSV file to JSON")
    parser.add_argument("csv_file", help="Path to the .csv file to convert")
    parser.add_argument(
        "--separator",
        choices=SUPPORTED_DELIMITERS,
        default=None,
        help="Column separator (default: CSVJSON_SEPARATOR or comma)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Generate pretty JSON",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output JSON path (default: <csv name>.json beside the input)",
    )


def _run_convert_command(client: CsvJsonClient, args: argparse.Namespace) -> int:
    """Handle convert command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.convert(
        args.csv_file,
        output_path=args.output,
        delimiter=args.separator,
        pretty=args.pretty,
    )
    print(format_result_line(result))
    return 0
