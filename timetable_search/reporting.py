"""Utilities for presenting and exporting extracted timetable entries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from .config import OutputConfig
from .extraction import TimetableEntry

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["day", "venue", "time", "course"]


def group_by_day(entries: Sequence[TimetableEntry]) -> Dict[str, List[TimetableEntry]]:
    """Group entries by day, keeping days in order of first appearance."""

    grouped: Dict[str, List[TimetableEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.day, []).append(entry)
    return grouped


def entries_to_frame(entries: Sequence[TimetableEntry]) -> pd.DataFrame:
    records = [
        {
            "day": entry.day,
            "venue": entry.class_info.venue,
            "time": entry.class_info.time,
            "course": entry.class_info.course,
        }
        for entry in entries
    ]
    return pd.DataFrame(records, columns=REPORT_COLUMNS)


def entries_to_json(entries: Sequence[TimetableEntry]) -> str:
    return json.dumps(
        [entry.as_dict() for entry in entries], ensure_ascii=False, indent=2
    )


def export_entries(entries: Sequence[TimetableEntry], output: OutputConfig) -> Dict[str, Path]:
    """Write the CSV and JSON reports to the configured output directory."""

    output_dir = output.directory
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Writing %d entries to %s", len(entries), output_dir)

    paths: Dict[str, Path] = {}

    csv_path = output_dir / output.csv_report
    entries_to_frame(entries).to_csv(csv_path, index=False)
    paths["csv"] = csv_path

    json_path = output_dir / output.json_report
    with json_path.open("w", encoding="utf-8") as handle:
        handle.write(entries_to_json(entries))
    paths["json"] = json_path

    return paths


def format_table(entries: Sequence[TimetableEntry]) -> str:
    """Render entries as one plain-text table per day."""

    if not entries:
        return "No results found."

    blocks: List[str] = []
    for day, day_entries in group_by_day(entries).items():
        frame = entries_to_frame(day_entries).drop(columns=["day"])
        blocks.append(f"{day}:\n{frame.to_string(index=False)}")
    return "\n\n".join(blocks)


__all__ = [
    "REPORT_COLUMNS",
    "entries_to_frame",
    "entries_to_json",
    "export_entries",
    "format_table",
    "group_by_day",
]
