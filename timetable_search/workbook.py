"""In-memory workbook grid and the xlsx loader that builds it."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from openpyxl import load_workbook as _open_workbook

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".xlsx", ".xlsm"}


@dataclass(frozen=True)
class SheetRange:
    """Occupied range of a sheet; both bounds are 0-based and inclusive."""

    max_row: int
    max_column: int


@dataclass
class Sheet:
    """A single day sheet addressed by 0-based ``(row, column)``."""

    name: str
    cells: Dict[Tuple[int, int], Any] = field(default_factory=dict)
    declared_range: Optional[SheetRange] = None

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[Any]]) -> "Sheet":
        cells: Dict[Tuple[int, int], Any] = {}
        for row_index, row in enumerate(rows):
            for column_index, value in enumerate(row):
                if value is not None:
                    cells[(row_index, column_index)] = value
        return cls(name=name, cells=cells)

    def value(self, row: int, column: int) -> Any:
        return self.cells.get((row, column))

    @property
    def range(self) -> Optional[SheetRange]:
        if self.declared_range is not None:
            return self.declared_range
        if not self.cells:
            return None
        max_row = max(row for row, _ in self.cells)
        max_column = max(column for _, column in self.cells)
        return SheetRange(max_row=max_row, max_column=max_column)


@dataclass
class Workbook:
    """Ordered collection of sheets."""

    sheets: List[Sheet] = field(default_factory=list)

    @property
    def sheet_names(self) -> List[str]:
        return [sheet.name for sheet in self.sheets]

    @classmethod
    def from_frames(cls, frames: Mapping[str, pd.DataFrame]) -> "Workbook":
        """Build a workbook from headerless frames keyed by sheet name.

        Frame positions (not labels) become grid coordinates and ``NaN``
        values are treated as absent cells.
        """

        sheets: List[Sheet] = []
        for name, frame in frames.items():
            cells: Dict[Tuple[int, int], Any] = {}
            for row_index, row in enumerate(frame.itertuples(index=False, name=None)):
                for column_index, value in enumerate(row):
                    if _is_missing(value):
                        continue
                    cells[(row_index, column_index)] = value
            sheets.append(Sheet(name=str(name), cells=cells))
        return cls(sheets=sheets)


def load_workbook(path: Path) -> Workbook:
    """Read an xlsx timetable into a :class:`Workbook`."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Workbook '{path}' does not exist")

    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file extension '{ext}' for workbook '{path}'")

    logger.info("Loading workbook from %s", path)
    source = _open_workbook(path, data_only=True, read_only=False)
    try:
        sheets = [_read_worksheet(ws) for ws in source.worksheets]
    finally:
        source.close()

    logger.debug("Loaded %d sheets: %s", len(sheets), [sheet.name for sheet in sheets])
    return Workbook(sheets=sheets)


def _read_worksheet(ws) -> Sheet:
    cells: Dict[Tuple[int, int], Any] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            cells[(cell.row - 1, cell.column - 1)] = cell.value

    declared: Optional[SheetRange] = None
    if cells:
        declared = SheetRange(max_row=ws.max_row - 1, max_column=ws.max_column - 1)
    return Sheet(name=ws.title, cells=cells, declared_range=declared)


def cell_text(value: Any) -> str:
    """Stringify a raw cell scalar; absent cells become the empty string."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is pd.NA or value is pd.NaT


def iter_sheets(workbook: Workbook, limit: Optional[int] = None) -> Iterable[Sheet]:
    sheets = workbook.sheets if limit is None else workbook.sheets[:limit]
    return iter(sheets)


__all__ = [
    "Sheet",
    "SheetRange",
    "Workbook",
    "cell_text",
    "iter_sheets",
    "load_workbook",
]
