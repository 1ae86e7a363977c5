"""Configuration for PaperShelf.

``load_config`` reads ``default.yml`` shipped with the package and layers an
optional user file on top; each section is parsed into a frozen dataclass and
validated.
"""

from __future__ import annotations

from PaperShelf.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    merge_config_dicts,
    parse_config_dict,
    parse_yaml,
)
from PaperShelf.config.catalog import CatalogConfig
from PaperShelf.config.display import DisplayConfig
from PaperShelf.config.runtime import RuntimeConfig
from PaperShelf.config.search import SearchConfig

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "DEFAULT_CONFIG_PATH",
    "DisplayConfig",
    "RuntimeConfig",
    "SearchConfig",
    "load_config",
    "merge_config_dicts",
    "parse_config_dict",
    "parse_yaml",
]
