"""
Command-line runner for the static-site SEO audit.

Usage:
    seo-audit -d dist
    seo-audit -d dist -u https://designedforyou.dev -o seo-report --keywords "web design,seo"
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import BASE_URL_ENV, DEFAULT_BASE_URL, AuditConfig, build_config, load_config_file, parse_keywords
from .errors import DirectoryNotFoundError, NoFilesFoundError, ReportWriteError
from .pipeline import audit_directory
from .report import write_report
from .scoring import aggregate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Audit a directory of HTML files for metadata and content SEO quality.")
    parser.add_argument("-d", "--directory", default=".", help="Directory to scan for .html files")
    parser.add_argument(
        "-u",
        "--url",
        default=None,
        help=f"Base site URL used in the report and canonical suggestions (default: ${BASE_URL_ENV} or {DEFAULT_BASE_URL})",
    )
    parser.add_argument("-o", "--output", default=None, help="Output directory for the report (default: seo-report)")
    parser.add_argument("-k", "--keywords", default=None, help="Focus keywords for density checks (comma separated)")
    parser.add_argument("--workers", type=int, default=None, help="Audit files on this many threads (default: 1)")
    parser.add_argument("--config", default=None, help="Optional JSON file with rubric weights and run options")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show per-file progress")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def resolve_config(args: argparse.Namespace) -> AuditConfig:
    config = build_config(load_config_file(args.config))
    changes: dict[str, Any] = {}
    if args.url:
        changes["base_url"] = args.url
    if args.output:
        changes["output_dir"] = Path(args.output)
    if args.keywords is not None:
        changes["keywords"] = parse_keywords(args.keywords)
    if args.workers is not None:
        changes["workers"] = args.workers
    return replace(config, **changes) if changes else config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = resolve_config(args)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    directory = Path(args.directory)
    print(f"Processing directory: {directory.resolve()}")
    print(f"Base URL: {config.base_url}")
    if config.keywords:
        print(f"Target keywords: {', '.join(config.keywords)}")

    try:
        run = audit_directory(directory, config)
    except DirectoryNotFoundError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"Audited {run.file_count} HTML files ({len(run.skipped)} skipped)")

    try:
        report = aggregate(run.metadata_results, run.content_results, config, skipped=run.skipped)
    except NoFilesFoundError:
        print(f"Error: no auditable HTML files found in {run.root}")
        return 1

    try:
        artifacts = write_report(report, config.output_dir, config.base_url, directory=run.root)
    except ReportWriteError as exc:
        print(f"Error: {exc}")
        return 1

    print(f"Metadata score: {report.metadata_score}/100 ({report.metadata_rating})")
    print(f"Content score: {report.content_score}/100 ({report.content_rating})")
    print(f"Readability: {report.readability_score}/100 ({report.readability_rating})")
    print(f"Overall score: {report.overall_score}/100 ({report.rating})")
    print(f"HTML report: {artifacts['html_report']}")
    print(f"JSON report: {artifacts['json_report']}")
    print(f"Latest report: {artifacts['latest_html']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
