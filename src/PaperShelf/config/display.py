"""Display domain configuration: terminal colors and external reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PaperShelf.config.common import ConfigSection, check_non_empty


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """Display configuration.

    Attributes:
        colored: Style output with ANSI colors when stdout is a terminal.
        external_reader: Program that ``open`` starts with the source path.
    """

    colored: bool
    external_reader: str


def load_display(raw: Mapping[str, Any]) -> DisplayConfig:
    section = ConfigSection.of(raw, "display")
    return DisplayConfig(
        colored=section.flag("colored"),
        external_reader=section.text("external_reader"),
    )


def check_display(config: DisplayConfig) -> None:
    check_non_empty(config.external_reader, "display.external_reader")
