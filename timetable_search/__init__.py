"""Timetable Search core package.

This package extracts a normalised weekly timetable from a spreadsheet laid
out as one sheet per day, one column per time slot and one row per venue.
The extraction itself is a pure function over an in-memory workbook grid;
loading, search-term parsing, reporting and storage are kept in separate
modules so the command line interface and any other front end can share
them.
"""

from .config import AppConfig, OutputConfig, SearchConfig, StorageConfig, load_config
from .extraction import ClassInfo, TimetableEntry, extract
from .reporting import entries_to_frame, export_entries, group_by_day
from .store import TimetableStore
from .terms import parse_terms
from .workbook import Sheet, SheetRange, Workbook, load_workbook

__all__ = [
    "AppConfig",
    "ClassInfo",
    "OutputConfig",
    "SearchConfig",
    "Sheet",
    "SheetRange",
    "StorageConfig",
    "TimetableEntry",
    "TimetableStore",
    "Workbook",
    "entries_to_frame",
    "export_entries",
    "extract",
    "group_by_day",
    "load_config",
    "load_workbook",
    "parse_terms",
]
