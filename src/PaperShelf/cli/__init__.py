"""CLI package for PaperShelf command orchestration.

Split into click definitions (``ui``), command logic (``commands``) and
catalog lifecycle management (``runner``).
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from PaperShelf.cli.runner import CommandRunner
from PaperShelf.cli.ui import cli


def main() -> None:
    """Run PaperShelf CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
