"""Parsing of the comma separated search text typed by a user."""

from __future__ import annotations

from typing import Iterable, List, Optional, Union


def parse_terms(text: Optional[Union[str, Iterable[str]]]) -> Optional[List[str]]:
    """Split ``text`` on commas into trimmed, non-blank search terms.

    ``None`` is passed through unchanged so callers can forward it to
    :func:`timetable_search.extraction.extract` as the free-slot query.
    A list of terms is accepted too and cleaned the same way.
    """

    if text is None:
        return None

    if isinstance(text, str):
        candidates: Iterable[str] = text.split(",")
    else:
        candidates = text

    terms = [str(term).strip() for term in candidates]
    terms = [term for term in terms if term]
    if not terms:
        raise ValueError("Please enter search terms")
    return terms


__all__ = ["parse_terms"]
