"""Keyed JSON store for saved timetables."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .extraction import TimetableEntry

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".timetable_search" / "store.json"
DEFAULT_KEY = "timetable"


class TimetableStore:
    """Persist entry lists as JSON text under string keys.

    The whole store is a single JSON object ``{key: [entry, ...]}`` that is
    rewritten on every change.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_STORE_PATH

    def keys(self) -> List[str]:
        return list(self._read())

    def save(self, entries: Sequence[TimetableEntry], key: str = DEFAULT_KEY) -> None:
        data = self._read()
        data[key] = [entry.as_dict() for entry in entries]
        self._write(data)
        logger.info("Saved %d entries under '%s' in %s", len(entries), key, self.path)

    def load(self, key: str = DEFAULT_KEY) -> List[TimetableEntry]:
        payload = self._read().get(key)
        if payload is None:
            return []
        return [TimetableEntry.from_dict(item) for item in payload]

    def delete(self, key: str = DEFAULT_KEY) -> bool:
        data = self._read()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def _read(self) -> Dict[str, list]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"Store file '{self.path}' is not valid JSON") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Store file '{self.path}' must contain a JSON object")
        return data

    def _write(self, data: Dict[str, list]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


__all__ = ["DEFAULT_KEY", "DEFAULT_STORE_PATH", "TimetableStore"]
