"""Command line entry points for sbom-scorecard."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .comparator import compare
from .grading import grade
from .logging import configure_logging
from .scorecard import build_report
from .settings import FAMILY_CHOICES, OUTPUT_FORMATS, Settings, get_settings


def _add_verbose_option(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_output_option(parser: argparse.ArgumentParser, default: str) -> None:
    parser.add_argument(
        "--outputFormat",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=default,
        help="Output format (default: %(default)s).",
    )


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sbom-scorecard",
        description="Score how completely an SBOM describes its packages and its own provenance.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    score_parser = subparsers.add_parser("score", help="Score a single SBOM file.")
    _add_verbose_option(score_parser, suppress_default=True)
    _add_output_option(score_parser, settings.output_format)
    score_parser.add_argument(
        "--sbomtype",
        choices=FAMILY_CHOICES,
        default=settings.default_family,
        help="SBOM family of the file; 'guess' detects it from the content (default: %(default)s).",
    )
    score_parser.add_argument("path", help="Path to the SBOM file.")

    compare_parser = subparsers.add_parser("compare", help="Compare the scores of two SBOM files.")
    _add_verbose_option(compare_parser, suppress_default=True)
    _add_output_option(compare_parser, settings.output_format)
    compare_parser.add_argument("--left-sbomtype", choices=FAMILY_CHOICES, default=settings.default_family)
    compare_parser.add_argument("--right-sbomtype", choices=FAMILY_CHOICES, default=settings.default_family)
    compare_parser.add_argument("left", help="Path to the first SBOM file.")
    compare_parser.add_argument("right", help="Path to the second SBOM file.")

    return parser


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=False)


def _run_score(args: argparse.Namespace) -> int:
    report = build_report(args.path, args.sbomtype)
    result = grade(report)
    if args.output_format == "json":
        print(_dump_json({"report": report.to_dict(), "grade": result.to_dict()}))
    else:
        print(report.report())
        print(result.render(), end="")
    return 0 if report.valid else 1


def _run_compare(args: argparse.Namespace) -> int:
    comparison = compare(
        args.left,
        args.right,
        left_family=args.left_sbomtype,
        right_family=args.right_sbomtype,
    )
    if args.output_format == "json":
        print(_dump_json(comparison.to_dict()))
    else:
        print(comparison.render(), end="")
    return 0 if comparison.left.valid and comparison.right.valid else 1


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = get_settings()
    except ValueError as e:
        _build_parser(Settings()).error(str(e))

    parser = _build_parser(settings)
    args = parser.parse_args(argv)
    try:
        configure_logging(verbose=getattr(args, "verbose", False), level=settings.log_level)
    except ValueError as e:
        parser.error(f"SBOM_SCORECARD_LOG_LEVEL: {e}")

    if args.command == "score":
        return _run_score(args)
    if args.command == "compare":
        return _run_compare(args)
    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
