"""Application config: packaged defaults layered with a user YAML file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from PaperShelf.config.catalog import CatalogConfig, check_catalog, load_catalog
from PaperShelf.config.display import DisplayConfig, check_display, load_display
from PaperShelf.config.runtime import RuntimeConfig, check_runtime, load_runtime
from PaperShelf.config.search import SearchConfig, check_search, load_search

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    catalog: CatalogConfig
    search: SearchConfig
    display: DisplayConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Build and validate an AppConfig from a fully merged mapping.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a value is missing or out of range.
    """
    config = AppConfig(
        runtime=load_runtime(raw),
        catalog=load_catalog(raw),
        search=load_search(raw),
        display=load_display(raw),
    )
    check_runtime(config.runtime)
    check_catalog(config.catalog)
    check_search(config.search)
    check_display(config.display)
    return config


def load_config(path: Path | None = None) -> AppConfig:
    """Load the packaged defaults, deep-merged with ``path`` when given.

    The user file only needs the keys it changes.
    """
    raw = read_yaml(DEFAULT_CONFIG_PATH)
    if path is not None and path != DEFAULT_CONFIG_PATH:
        raw = merge_config_dicts(raw, read_yaml(path))
    return parse_config_dict(raw)


def read_yaml(path: Path) -> dict[str, Any]:
    return parse_yaml(path.read_text(encoding="utf-8"))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text whose root must be a mapping (an empty file is ``{}``)."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into ``base``; nested mappings merge key by key."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
