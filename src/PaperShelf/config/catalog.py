"""Catalog domain configuration: file name and location override."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PaperShelf.config.common import ConfigSection, check_non_empty


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Catalog configuration.

    Attributes:
        file_name: Name of the catalog file searched in the working directory
            and its parents.
        path_env: Environment variable that pins the catalog directory. An
            empty name disables the override.
    """

    file_name: str
    path_env: str


def load_catalog(raw: Mapping[str, Any]) -> CatalogConfig:
    section = ConfigSection.of(raw, "catalog")
    return CatalogConfig(
        file_name=section.text("file_name"),
        path_env=section.text("path_env", ""),
    )


def check_catalog(config: CatalogConfig) -> None:
    """Validate catalog settings.

    Raises:
        ValueError: If the file name is empty or contains a directory part.
    """
    check_non_empty(config.file_name, "catalog.file_name")
    if "/" in config.file_name or "\\" in config.file_name:
        raise ValueError("catalog.file_name must be a bare file name")
