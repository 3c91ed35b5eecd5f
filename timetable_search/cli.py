"""Command line interface for searching a timetable workbook."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .config import AppConfig, load_config
from .extraction import TimetableEntry, extract
from .reporting import entries_to_json, export_entries, format_table
from .store import TimetableStore
from .terms import parse_terms
from .workbook import load_workbook

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search a weekly class timetable workbook")
    parser.add_argument("workbook", type=Path, help="Path to the timetable .xlsx file")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--terms", help="Comma separated search terms, e.g. 'CS101, MT104'")
    mode.add_argument("--free", action="store_true", help="List free venue/time slots instead")
    parser.add_argument("--output-dir", type=Path, help="Write CSV and JSON reports to this directory")
    parser.add_argument("--save", action="store_true", help="Persist results to the keyed store")
    parser.add_argument("--store", type=Path, help="Override path to the store file (implies --save)")
    parser.add_argument("--key", help="Key to save results under (implies --save)")
    parser.add_argument("--format", choices=("json", "table"), default="json", help="Console output format")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING)")
    parser.add_argument("--quiet", action="store_true", help="Suppress console output of results")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else AppConfig()
        _apply_overrides(config, args)
        terms = _resolve_terms(config)
    except Exception as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    try:
        workbook = load_workbook(args.workbook)
    except Exception as exc:
        logger.exception("Failed to load workbook: %s", exc)
        return 1

    entries = extract(workbook, terms)
    logger.info("Found %d entries", len(entries))

    if config.output.enabled:
        try:
            export_entries(entries, config.output)
        except Exception as exc:
            logger.exception("Failed to export results: %s", exc)
            return 1

    if args.save or args.store or args.key:
        try:
            TimetableStore(config.storage.path).save(entries, config.storage.key)
        except Exception as exc:
            logger.exception("Failed to save results: %s", exc)
            return 1

    if not args.quiet:
        _print_entries(entries, args.format)

    return 0


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    if args.terms is not None:
        config.search.terms = parse_terms(args.terms)
        config.search.free_slots = False

    if args.free:
        config.search.terms = None
        config.search.free_slots = True

    if args.output_dir:
        config.output.directory = _resolve_override_path(args.output_dir)
        config.output.enabled = True

    if args.store:
        config.storage.path = _resolve_override_path(args.store)

    if args.key:
        config.storage.key = args.key


def _resolve_terms(config: AppConfig) -> Optional[List[str]]:
    if config.search.free_slots:
        return None
    if not config.search.terms:
        raise ValueError("Please enter search terms or use --free")
    return parse_terms(config.search.terms)


def _resolve_override_path(path: Path) -> Path:
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def _print_entries(entries: List[TimetableEntry], output_format: str) -> None:
    if output_format == "table":
        print(format_table(entries))
        return
    if not entries:
        print("No results found.")
        return
    print(entries_to_json(entries))


if __name__ == "__main__":  # pragma: no cover - manual execution entry point
    raise SystemExit(main())
