"""
CLI Module

Architectural Intent:
- Command-line interface for invoking a CPI executable by hand
- Delegates to ExternalCpi via the composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import json
import logging
import sys
import traceback
from typing import Any, Optional

from cpiwire.composition_root import create_container
from cpiwire.domain.errors import ExternalCpiError, RetriableCloudError
from cpiwire.domain.value_objects.cpi_method import METHOD_TABLE
from cpiwire.infrastructure.config import load_config
from cpiwire.infrastructure.logging import configure_logging


def parse_argument(raw: str) -> Any:
    """Parse a CLI argument as JSON, keeping it as a plain string otherwise."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpiwire",
        description="Invoke external Cloud Provider Interface executables",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON logs"
    )
    parser.add_argument(
        "--trace-cpi",
        action="store_true",
        help="Log every CPI request and response without debugging the rest",
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to cpiwire.json"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("methods", help="List the CPI methods and their parameters")

    call_parser = subparsers.add_parser(
        "call",
        help="Call a CPI method",
        epilog=(
            "Arguments are parsed as JSON and fall back to plain strings, so a "
            "numeric-looking CID such as 123 becomes an integer. Quote it as "
            "JSON to pass a string: cpiwire call delete_vm '\"123\"'"
        ),
    )
    call_parser.add_argument("method", help="CPI method name, e.g. create_vm")
    call_parser.add_argument(
        "arguments",
        nargs="*",
        help=(
            "Positional arguments, each parsed as JSON; "
            "write numeric-looking CIDs as '\"123\"'"
        ),
    )
    _add_target_options(call_parser)

    ping_parser = subparsers.add_parser("ping", help="Ping the CPI")
    _add_target_options(ping_parser)

    return parser


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cpi", default=None, help="Path to the CPI executable")
    parser.add_argument(
        "--director-uuid", default=None, help="Director UUID for the request context"
    )


def _describe_error(error: ExternalCpiError) -> str:
    line = f"[-] {type(error).__name__}: {error}"
    if isinstance(error, RetriableCloudError):
        line += f" (ok_to_retry={json.dumps(error.ok_to_retry)})"
    return line


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)

    traffic_level = logging.DEBUG if args.trace_cpi else None
    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=args.json_logs)
    elif args.verbose:
        configure_logging(
            level=logging.INFO,
            json_format=args.json_logs,
            traffic_level=traffic_level,
        )
    else:
        configure_logging(
            level=config.log_level,
            json_format=args.json_logs,
            traffic_level=traffic_level,
        )

    if args.command == "methods":
        for method in METHOD_TABLE.values():
            print(f"{method.name}({method.signature()})")
        return 0

    if args.command in ("call", "ping"):
        if args.command == "ping":
            method, arguments = "ping", []
        else:
            method = args.method
            arguments = [parse_argument(a) for a in args.arguments]

        container = create_container(
            config, cpi_path=args.cpi, director_uuid=args.director_uuid
        )
        if not container.cpi.cpi_path:
            print("[-] No CPI path configured (use --cpi or CPIWIRE_CPI_PATH)")
            return 1
        if container.config.telemetry.endpoint:
            asyncio.run(container.exporter.initialize())

        try:
            result = container.cpi.call(method, *arguments)
        except ExternalCpiError as e:
            print(_describe_error(e))
            if args.debug:
                traceback.print_exc()
            return 1

        print(json.dumps(result, indent=2))
        return 0

    parser.print_help()
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
