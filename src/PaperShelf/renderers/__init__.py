"""Output renderers for command results.

Provides the console writer and text rendering helpers, plus a factory that
builds the writer from configuration.
"""

from __future__ import annotations

import sys
from pathlib import Path

from PaperShelf.config import AppConfig
from PaperShelf.renderers.console import (
    ConsoleOutputWriter,
    render_document,
    render_documents,
    render_ids,
)


def create_output_writer(config: AppConfig, base_dir: Path) -> ConsoleOutputWriter:
    """Create the console writer.

    Colors are used only when enabled in config and stdout is a terminal.

    Args:
        config: Application configuration.
        base_dir: Catalog directory for resolving local files.
    """
    colored = config.display.colored and sys.stdout.isatty()
    return ConsoleOutputWriter(base_dir, colored=colored)


__all__ = [
    "ConsoleOutputWriter",
    "create_output_writer",
    "render_document",
    "render_documents",
    "render_ids",
]
