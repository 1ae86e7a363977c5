"""Command runner for coordinating CLI execution.

Manages logging configuration, catalog discovery, loading and storing the
document store, and error handling for command execution.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import click

from PaperShelf.cli.commands import Command
from PaperShelf.config import AppConfig
from PaperShelf.core.errors import PaperShelfError
from PaperShelf.core.store import DocumentStore
from PaperShelf.renderers import ConsoleOutputWriter, create_output_writer
from PaperShelf.storage import init_catalog, load_store, locate_catalog, save_store
from PaperShelf.utils.log import configure_logging, log


@dataclass(slots=True)
class CatalogSession:
    """Loaded catalog handed to command builders."""

    path: Path
    store: DocumentStore
    output_writer: ConsoleOutputWriter

    @property
    def base_dir(self) -> Path:
        """Directory holding the catalog file."""
        return self.path.parent


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    A command either completes and, when it mutates the catalog, is persisted
    as a whole, or fails and leaves the catalog file untouched.
    """

    def __init__(self, config: AppConfig, start_dir: Path | None = None) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            start_dir: Directory where catalog discovery starts (default: cwd).
        """
        self.config = config
        self.start_dir = start_dir

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run(
        self,
        action: str,
        build: Callable[[CatalogSession], Command],
        *,
        persist: bool = False,
    ) -> None:
        """Load the catalog, execute one command and store it back if needed.

        Args:
            action: The CLI command name (e.g., 'search').
            build: Creates the command from the loaded session.
            persist: Write the store back after a successful execution.

        Raises:
            click.ClickException: On a domain error (unknown id, bad query,
                missing or corrupt catalog).
            click.Abort: On any unexpected failure.
        """
        self._configure_logging(action)
        try:
            path = locate_catalog(self.config, self.start_dir)
            session = CatalogSession(
                path=path,
                store=load_store(path),
                output_writer=create_output_writer(self.config, path.parent),
            )
            command = build(session)
            command.execute()
            if persist:
                save_store(path, session.store)
        except PaperShelfError as e:
            log.debug("%s failed: %r", action, e)
            raise click.ClickException(str(e)) from e
        except click.ClickException:
            raise
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e

    def run_init(self, directory: Path) -> Path:
        """Create an empty catalog in ``directory``.

        Raises:
            click.ClickException: If a catalog already exists there.
        """
        self._configure_logging("init")
        try:
            path = init_catalog(directory, self.config.catalog.file_name)
        except PaperShelfError as e:
            raise click.ClickException(str(e)) from e
        log.info("Initialized empty catalog in %s", path)
        return path
