"""Command-line interface: ``sqlcheck -f schema.sql``."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .checker import SQLChecker
from .config import CheckConfig
from .exceptions import ConfigurationError
from .report import render_json, render_text
from .rules import Category, Severity, get_all_rules
from .splitter import read_sql

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlcheck",
        description="Detect anti-patterns in SQL schemas and queries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-f", "--file", default=None, help="SQL file to check (default: stdin)")
    parser.add_argument("-d", "--delimiter", default=";", help="Statement delimiter")
    parser.add_argument(
        "-r",
        "--risk-level",
        default="info",
        choices=[s.value for s in Severity],
        help="Only report findings with this severity or higher",
    )
    parser.add_argument(
        "-c",
        "--category",
        action="append",
        default=None,
        help=f"Category to check, repeatable ({', '.join(c.value for c in Category)})",
    )
    parser.add_argument(
        "--disable", action="append", default=[], metavar="RULE_ID", help="Skip a rule"
    )
    parser.add_argument(
        "--no-statement",
        action="store_true",
        help="Do not print the offending statements",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Print rule titles only, without advice"
    )
    parser.add_argument("--color", action="store_true", help="Colourize output")
    parser.add_argument("--format", choices=["text", "json"], default="text")
    parser.add_argument("--dialect", default=None, help="sqlglot dialect used to split input")
    parser.add_argument("--workers", type=int, default=1, help="Threads used to check statements")
    parser.add_argument("--index-count-threshold", type=int, default=3)
    parser.add_argument("--join-count-threshold", type=int, default=5)
    parser.add_argument("--distinct-count-threshold", type=int, default=5)
    parser.add_argument("--nesting-threshold", type=int, default=2)
    parser.add_argument("--spaghetti-length-threshold", type=int, default=500)
    parser.add_argument("--list-rules", action="store_true", help="List rules and exit")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def build_config(args: argparse.Namespace) -> CheckConfig:
    """Map parsed arguments onto a validated CheckConfig."""
    return CheckConfig(
        minimum_severity=args.risk_level,
        enabled_categories=args.category if args.category else frozenset(Category),
        print_statement=not args.no_statement,
        verbose=not args.quiet,
        disabled_rules=args.disable,
        index_count_threshold=args.index_count_threshold,
        join_count_threshold=args.join_count_threshold,
        distinct_count_threshold=args.distinct_count_threshold,
        nesting_threshold=args.nesting_threshold,
        spaghetti_length_threshold=args.spaghetti_length_threshold,
        dialect=args.dialect,
        delimiter=args.delimiter,
    )


def list_rules() -> str:
    lines = []
    for rule in get_all_rules():
        lines.append(
            f"{rule.rule_id:<24} {rule.severity.value:<6} {rule.category.value:<12} {rule.title}"
        )
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list_rules:
        sys.stdout.write(list_rules())
        return 0

    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        config = build_config(args)
    except ConfigurationError as e:
        parser.error(str(e))

    try:
        sql = read_sql(args.file)
    except OSError as e:
        logger.error("Could not read %s: %s", args.file, e)
        return 2

    report = SQLChecker(config).check_sql(sql, workers=args.workers)

    if args.format == "json":
        sys.stdout.write(render_json(report) + "\n")
    else:
        sys.stdout.write(render_text(report, config, color=args.color))

    return 1 if report.has_findings else 0


if __name__ == "__main__":
    raise SystemExit(main())
