"""Timetable extraction from a day-per-sheet workbook grid.

Layout of every day sheet::

    row 2      time-slot labels, one per column, formatted ``"start-end"``
    row 5..    one venue per row, venue name in column 0
    column 1.. free-text course cells

Entries are produced column by column, and within a column row by row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .workbook import Sheet, Workbook, cell_text, iter_sheets

logger = logging.getLogger(__name__)

MAX_DAYS = 5
TIME_SLOT_ROW = 2
FIRST_DATA_ROW = 5
VENUE_COLUMN = 0
LAB_MARKER = "lab"
LAB_SPAN = 2
UNKNOWN_END = "Unknown"


@dataclass
class ClassInfo:
    venue: str
    time: str
    course: str

    def as_dict(self) -> Dict[str, str]:
        return {"venue": self.venue, "time": self.time, "course": self.course}


@dataclass
class TimetableEntry:
    """A single scheduled (or free) venue/time slot on a given day."""

    day: str
    class_info: ClassInfo

    def as_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "class_info": self.class_info.as_dict()}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TimetableEntry":
        info = payload.get("class_info") or {}
        return cls(
            day=str(payload.get("day", "")),
            class_info=ClassInfo(
                venue=str(info.get("venue", "")),
                time=str(info.get("time", "")),
                course=str(info.get("course", "")),
            ),
        )


def extract(workbook: Workbook, terms: Optional[Sequence[str]]) -> List[TimetableEntry]:
    """Return the timetable entries of ``workbook`` matching ``terms``.

    ``terms`` is a list of case-sensitive substrings; a cell matches when it
    contains any of them. Passing ``None`` switches to the free-slot query,
    which returns only the cells whose text is exactly empty.
    """

    entries: List[TimetableEntry] = []
    for sheet in iter_sheets(workbook, MAX_DAYS):
        found = _extract_sheet(sheet, terms)
        logger.debug("Sheet '%s' produced %d entries", sheet.name, len(found))
        entries.extend(found)
    return entries


def _extract_sheet(sheet: Sheet, terms: Optional[Sequence[str]]) -> List[TimetableEntry]:
    bounds = sheet.range
    if bounds is None:
        return []

    day = sheet.name
    entries: List[TimetableEntry] = []

    for column in range(VENUE_COLUMN + 1, bounds.max_column + 1):
        time_slot = cell_text(sheet.value(TIME_SLOT_ROW, column))

        for row in range(FIRST_DATA_ROW, bounds.max_row + 1):
            venue = sheet.value(row, VENUE_COLUMN)
            if venue is None or venue == "":
                continue

            text = cell_text(sheet.value(row, column))

            if terms is None:
                if text != "":
                    continue
                time = _format_time(*_split_slot(time_slot))
            elif any(term in text for term in terms):
                if LAB_MARKER in text.lower():
                    start, _ = _split_slot(time_slot)
                    end = _lab_end(sheet, column, bounds.max_column)
                    time = _format_time(start, end)
                else:
                    time = _format_time(*_split_slot(time_slot))
            else:
                continue

            entries.append(
                TimetableEntry(
                    day=day,
                    class_info=ClassInfo(
                        venue=cell_text(venue).strip(),
                        time=time,
                        course=text.replace("\n", " "),
                    ),
                )
            )

    return entries


def _lab_end(sheet: Sheet, column: int, max_column: int) -> str:
    # a lab fills three slot columns; its end time sits on the last one
    target = column + LAB_SPAN
    if target > max_column:
        return UNKNOWN_END
    _, end = _split_slot(cell_text(sheet.value(TIME_SLOT_ROW, target)))
    return end


def _split_slot(label: str) -> Tuple[str, str]:
    start, _, end = label.partition("-")
    return start, end


def _format_time(start: str, end: str) -> str:
    return f"{start.strip()} - {end.strip()}".strip()


__all__ = [
    "ClassInfo",
    "TimetableEntry",
    "extract",
    "FIRST_DATA_ROW",
    "LAB_SPAN",
    "MAX_DAYS",
    "TIME_SLOT_ROW",
    "UNKNOWN_END",
    "VENUE_COLUMN",
]
