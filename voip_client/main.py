"""
Main module for the VOIP client CLI.

This module provides a command-line interface for calling VOIP API methods
directly. Credentials come from a YAML configuration file and/or command-line
flags; extra parameters are given as key=value pairs and sent as query
parameters (get) or form fields (post).

Functions:
    parse_args(argv=None):
        Parses command-line arguments for the VOIP client CLI.

    parse_pairs(pairs: List[str]) -> Dict[str, str]:
        Parses key=value arguments into a dictionary.

    build_config(args) -> ClientConfig:
        Combines the configuration file with command-line overrides.

    configure_logging(log_file: str | None, verbosity: int):
        Configures logging handlers and verbosity levels.

    show_result(result: Dict[str, Any]):
        Displays a decoded response as a formatted table.

    main(argv=None):
        Entry point for the CLI.

Usage:
    voip-client --config voip.yaml get getBalance
    voip-client --config voip.yaml post createSubAccount username=bob password=s3cret

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ClientConfig, load_config
from .errors import ConfigurationError, VoipError
from .logging_utils import log_event
from .responses import RawResponse

console = Console()
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="voip-client",
        description="VOIP client - call VOIP provider API methods from the command line")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None,
                        help="Set path to YAML configuration file")
    parser.add_argument("--endpoint", default=None,
                        help="Set API endpoint URL (overrides config)")
    parser.add_argument("--username", default=None,
                        help="Set API username (overrides config)")
    parser.add_argument("--password", default=None,
                        help="Set API password (overrides config)")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Set request timeout in seconds (overrides config)")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="Log full requests and responses")
    parser.add_argument("--log-file", default=None,
                        help="Set path to log file")
    parser.add_argument("-v", "--verbose", action="count",
                        default=0, help="Verbose output")
    sub = parser.add_subparsers(dest="command", required=True)
    for verb, where in (("get", "query parameters"), ("post", "form fields")):
        p = sub.add_parser(verb, help=f"Call an API method with {where}")
        p.add_argument("method", help="API method name")
        p.add_argument("fields", nargs="*", metavar="KEY=VALUE",
                       help=f"Extra {where}")
    return parser.parse_args(argv)


def parse_pairs(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        out[key] = value
    return out


def build_config(args) -> ClientConfig:
    overrides = {
        "endpoint": args.endpoint,
        "username": args.username,
        "password": args.password,
        "debug": args.debug,
        "timeout": args.timeout,
    }
    if args.config:
        return load_config(Path(args.config)).with_overrides(**overrides)
    return ClientConfig.from_dict({k: v for k, v in overrides.items() if v is not None})


def configure_logging(log_file: str | None, verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        handlers.append(fh)
    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def show_result(result: Dict[str, Any]):
    table = Table(title="RESPONSE", box=box.SIMPLE_HEAVY)
    table.add_column("KEY")
    table.add_column("VALUE")
    for key, value in result.items():
        if not isinstance(value, str):
            value = json.dumps(value, ensure_ascii=False, default=str)
        table.add_row(key, value)
    console.print(table)


def main(argv=None):
    args = parse_args(argv)
    verbosity = args.verbose
    if args.debug:
        verbosity = max(verbosity, 1)
    configure_logging(args.log_file, verbosity)

    try:
        config = build_config(args)
        fields = parse_pairs(args.fields)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        return 2

    try:
        with config.create_client() as client:
            if args.command == "get":
                result = client.get(args.method, fields, RawResponse)
            else:
                result = client.post(args.method, fields, RawResponse)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        return 2
    except VoipError as e:
        console.print(f"[red]{args.command.upper()} {args.method} failed[/red]: {e}")
        log_event(logger, "error", command=args.command, method=args.method,
                  kind=type(e).__name__, error=str(e))
        return 1

    log_event(logger, "sent", command=args.command, method=args.method)
    show_result(result.model_dump())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
