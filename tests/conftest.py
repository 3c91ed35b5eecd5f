from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence
import sys

import pytest
from openpyxl import Workbook as OpenpyxlWorkbook

# Ensure project root is on sys.path for absolute imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from timetable_search.workbook import Sheet, Workbook


def build_rows(slots: Sequence[Any], venue_rows: Sequence[Sequence[Any]]) -> List[List[Any]]:
    """Lay out a day grid: slot labels on row 2, venue rows from row 5."""

    rows: List[List[Any]] = [[], [], [None, *slots], [], []]
    rows.extend(list(row) for row in venue_rows)
    return rows


def build_sheet(
    name: str,
    slots: Sequence[Any],
    venue_rows: Sequence[Sequence[Any]],
) -> Sheet:
    return Sheet.from_rows(name, build_rows(slots, venue_rows))


@pytest.fixture
def week() -> Workbook:
    monday = build_sheet(
        "Monday",
        ["9-10", "10-11", "11-12", "12-1"],
        [
            ["Room101", "CS101\nLab", "", "", "MT104"],
            ["Room102", "", "CS101 Theory", None, ""],
            [None, "CS101", "CS101", "CS101", "CS101"],
        ],
    )
    tuesday = build_sheet(
        "Tuesday",
        ["8:30-9:50", "10:00-11:20"],
        [["Hall A", "PH201", "CS101"]],
    )
    return Workbook(sheets=[monday, tuesday])


@pytest.fixture
def write_xlsx(tmp_path):
    def _write(sheets: Sequence[tuple], filename: str = "timetable.xlsx") -> Path:
        book = OpenpyxlWorkbook()
        book.remove(book.active)
        for name, rows in sheets:
            ws = book.create_sheet(title=name)
            for row_index, row in enumerate(rows, start=1):
                for column_index, value in enumerate(row, start=1):
                    if value is not None:
                        ws.cell(row=row_index, column=column_index, value=value)
        path = tmp_path / filename
        book.save(path)
        return path

    return _write
