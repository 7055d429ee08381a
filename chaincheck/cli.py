#!/usr/bin/env python3
"""
chaincheck CLI

Thin wrapper over the analysis engine.

Exit codes:
  0  no findings
  1  findings reported
  2  usage or internal error
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

from chaincheck.config import DEFAULT_BASE_REF, DEFAULT_FORMAT, OUTPUT_FORMATS, Config
from chaincheck.explanation import format_json, format_text
from chaincheck.orchestrator import analyze_paths

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chaincheck",
        description="Find except blocks that raise a new exception without chaining the caught one.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chaincheck check .
  chaincheck check src/ tests/test_api.py
  chaincheck check --changed --base-ref origin/main .
        """,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="{check}",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Check Python files and directories",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to check (default: current directory)",
    )
    check_parser.add_argument(
        "--changed",
        action="store_true",
        help="Only check files changed in the Git working tree",
    )
    check_parser.add_argument(
        "--base-ref",
        default=DEFAULT_BASE_REF,
        help=f"Ref that --changed compares against (default: {DEFAULT_BASE_REF})",
    )
    check_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=DEFAULT_FORMAT,
        help=f"Output format (default: {DEFAULT_FORMAT})",
    )
    check_parser.add_argument(
        "--max-findings",
        type=int,
        default=None,
        metavar="N",
        help="Report at most N findings",
    )
    check_parser.add_argument(
        "--exclude",
        action="append",
        metavar="NAME",
        help="Directory name to skip (repeatable)",
    )
    check_parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and full tracebacks",
    )

    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        _configure_logging(args.debug)

        try:
            config = Config.from_args(args)
            findings = analyze_paths([Path(p) for p in args.paths], config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except Exception:
            print("Internal error while checking files.", file=sys.stderr)
            if args.debug:
                traceback.print_exc()
            else:
                print("Run with --debug for details.", file=sys.stderr)
            return EXIT_ERROR

        if config.output_format == "json":
            print(format_json(findings))
        elif findings:
            print(format_text(findings))
            print()
            print(f"Total findings: {len(findings)}")

        return EXIT_FINDINGS if findings else EXIT_CLEAN

    # This should never happen because argparse enforces commands
    parser.error(f"Unknown command: {args.command}")
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
