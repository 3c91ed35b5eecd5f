"""Configuration loading utilities for Timetable Search."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .store import DEFAULT_KEY, DEFAULT_STORE_PATH
from .terms import parse_terms


@dataclass
class SearchConfig:
    """What to look for in the timetable."""

    terms: Optional[List[str]] = None
    free_slots: bool = False


@dataclass
class OutputConfig:
    """Paths describing where reports should be written."""

    directory: Path = Path("output")
    csv_report: str = "timetable.csv"
    json_report: str = "timetable.json"
    # set when a config file has an output section or --output-dir is given
    enabled: bool = False

    def resolved(self, base_path: Path) -> "OutputConfig":
        return OutputConfig(
            directory=_resolve_path(self.directory, base_path),
            csv_report=self.csv_report,
            json_report=self.json_report,
            enabled=self.enabled,
        )


@dataclass
class StorageConfig:
    """Location of the keyed store and the key results are saved under."""

    path: Path = DEFAULT_STORE_PATH
    key: str = DEFAULT_KEY

    def resolved(self, base_path: Path) -> "StorageConfig":
        return StorageConfig(path=_resolve_path(self.path, base_path), key=self.key)


@dataclass
class AppConfig:
    """Container for all configuration required by the CLI."""

    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    def resolved(self, base_path: Path) -> "AppConfig":
        return AppConfig(
            search=self.search,
            output=self.output.resolved(base_path),
            storage=self.storage.resolved(base_path),
        )


def load_config(path: Path) -> AppConfig:
    """Load :class:`AppConfig` from a YAML file."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' does not exist")

    with config_path.open("r", encoding="utf-8") as stream:
        raw_config = yaml.safe_load(stream) or {}

    if not isinstance(raw_config, Mapping):
        raise ValueError("Configuration must be a mapping of sections")

    search = _parse_search_section(_section(raw_config, "search"))
    output = OutputConfig(**_parse_output_section(_section(raw_config, "output")))
    storage = StorageConfig(**_parse_storage_section(_section(raw_config, "storage")))

    config = AppConfig(search=search, output=output, storage=storage)
    return config.resolved(config_path.parent)


def _section(raw_config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw_config.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return section


def _parse_search_section(section: Mapping[str, Any]) -> SearchConfig:
    terms = section.get("terms")
    if terms is not None:
        if not isinstance(terms, (str, list)):
            raise ValueError("search.terms must be a string or a list of strings")
        terms = parse_terms(terms)

    free_slots = section.get("free_slots", False)
    if not isinstance(free_slots, bool):
        raise ValueError("search.free_slots must be true or false")
    if free_slots and terms:
        raise ValueError("search.terms and search.free_slots cannot be combined")
    return SearchConfig(terms=terms, free_slots=free_slots)


def _parse_output_section(section: Mapping[str, Any]) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    if section:
        parsed["enabled"] = True
    if "directory" in section:
        parsed["directory"] = Path(section["directory"])
    for key in ("csv_report", "json_report"):
        if key in section:
            parsed[key] = str(section[key])
    return parsed


def _parse_storage_section(section: Mapping[str, Any]) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    if "path" in section:
        parsed["path"] = Path(section["path"])
    if "key" in section:
        parsed["key"] = str(section["key"])
    return parsed


def _resolve_path(path: Path, base_path: Path) -> Path:
    expanded = Path(path).expanduser()
    if expanded.is_absolute():
        return expanded
    return (base_path / expanded).resolve()
