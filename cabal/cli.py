#!/usr/bin/env python3
"""Cabal CLI - track how similar handins group together as the threshold is relaxed.

Usage:
    python -m cabal.cli evolve reports/a2.allpairs --max-similarity 6 --handin-name a2.py
    python -m cabal.cli load reports/a2.allpairs data/a2_table.parquet --handin-name a2.py
    python -m cabal.cli evolve data/a2_table.parquet --table --step 2
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from cabal.grouping import evolve, render_snapshot, threshold_boundaries
from cabal.similarity import (
    SimilarityTable,
    handin_id_pattern,
    load_report_file,
    load_table,
    percent_to_score,
    save_table,
)
from cabal.similarity.report import IdPattern
from cabal.utils.io_utils import load_settings
from cabal.utils.logging_utils import DEFAULT_FORMAT, setup_logging
from cabal.utils.path_utils import get_config_path
from cabal.utils.settings import get_analysis_settings, validate_settings

logger = logging.getLogger(__name__)


def _percent(value: str) -> int:
    percent = int(value)
    if not 0 <= percent <= 100:
        raise argparse.ArgumentTypeError(f"{percent} is not in 0..=100")
    return percent


def _positive_percent(value: str) -> int:
    percent = _percent(value)
    if percent == 0:
        raise argparse.ArgumentTypeError("step must be at least 1")
    return percent


def _add_id_arguments(parser: argparse.ArgumentParser) -> None:
    ids = parser.add_mutually_exclusive_group()
    ids.add_argument(
        "--handin-name",
        help="File name used in the report paths; ids are the directory above it",
    )
    ids.add_argument(
        "--id-pattern",
        help="Regex whose first group extracts the id from a report path",
    )
    ids.add_argument(
        "--raw-ids", action="store_true", help="Use report paths verbatim as ids",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cabal",
        description="Report how items cluster as the similarity threshold is relaxed",
    )
    parser.add_argument("--config", help="Path to config file (default: config/settings.yaml)")
    parser.add_argument("--log-level", help="Override logging level (DEBUG, INFO, ...)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    evolve_parser = subparsers.add_parser(
        "evolve", help="Print the cliques at each threshold",
    )
    evolve_parser.add_argument("file", help="allpairs report (or saved table with --table)")
    evolve_parser.add_argument(
        "--table", action="store_true", help="FILE is a table saved by the load command",
    )
    evolve_parser.add_argument(
        "-m",
        "--max-similarity",
        type=_percent,
        help="Maximum percentage to display similarities at",
    )
    evolve_parser.add_argument(
        "--step", type=_positive_percent, help="Percentage between thresholds",
    )
    _add_id_arguments(evolve_parser)

    load_parser = subparsers.add_parser(
        "load", help="Parse an allpairs report and save the similarity table",
    )
    load_parser.add_argument("in_file", help="allpairs report")
    load_parser.add_argument("out_file", help="Output table path (.parquet or .csv)")
    _add_id_arguments(load_parser)

    return parser


def resolve_id_pattern(args: argparse.Namespace, settings: dict[str, Any]) -> IdPattern:
    """Pick the id pattern: command line first, then config."""
    if args.raw_ids:
        return None
    if args.id_pattern:
        return args.id_pattern
    if args.handin_name:
        return handin_id_pattern(args.handin_name)

    report = settings.get("report", {})
    if report.get("id_pattern"):
        return report["id_pattern"]
    if report.get("handin_name"):
        return handin_id_pattern(report["handin_name"])
    return None


def _load_report(path: str, args: argparse.Namespace, settings: dict[str, Any]) -> SimilarityTable:
    encoding = settings.get("report", {}).get("encoding", "utf-8")
    return load_report_file(path, resolve_id_pattern(args, settings), encoding=encoding)


def run_evolve(args: argparse.Namespace, settings: dict[str, Any]) -> int:
    sweep = get_analysis_settings(settings, args.max_similarity, args.step)
    table = load_table(args.file) if args.table else _load_report(args.file, args, settings)

    boundaries = threshold_boundaries(
        percent_to_score(sweep["max_similarity_percent"]),
        percent_to_score(sweep["step_percent"]),
    )
    for snapshot in evolve(table, boundaries):
        print(render_snapshot(snapshot))
    return 0


def run_load(args: argparse.Namespace, settings: dict[str, Any]) -> int:
    out_path = Path(args.out_file)
    if not out_path.suffix:
        fmt = settings.get("persistence", {}).get("format", "parquet")
        out_path = out_path.with_suffix(f".{fmt}")

    table = _load_report(args.in_file, args, settings)
    save_table(table, out_path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config or str(get_config_path())
    settings = load_settings(config_path)

    log_settings = settings.get("logging", {})
    setup_logging(
        args.log_level or log_settings.get("level", "INFO"),
        log_settings.get("file"),
        log_settings.get("format", DEFAULT_FORMAT),
    )
    for warning in validate_settings(settings):
        logger.warning(warning)

    try:
        if args.command == "evolve":
            return run_evolve(args, settings)
        return run_load(args, settings)
    except (OSError, ValueError, ImportError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
