"""Logging configuration, read from the ``log`` section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PaperShelf.config.common import ConfigSection, check_non_empty

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings.

    Attributes:
        level: Console level name, upper-cased.
        to_file: Also write a DEBUG log per command under ``dir``.
        dir: Root directory of the per-command log files.
    """

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    section = ConfigSection.of(raw, "log")
    return RuntimeConfig(
        level=section.text("level").upper(),
        to_file=section.flag("to_file"),
        dir=section.text("dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate log settings.

    Raises:
        ValueError: On an unknown level or an empty log directory.
    """
    if config.level not in _LOG_LEVELS:
        raise ValueError(f"log.level must be one of {', '.join(_LOG_LEVELS)}")
    check_non_empty(config.dir, "log.dir")
