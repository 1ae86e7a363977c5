"""PaperShelf logging.

Every module logs through ``log``. Messages go to stderr so that stdout only
carries command output (``search --short`` is meant to be piped).
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Final

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATEFMT: Final = "%m-%d %H:%M:%S"

log = logging.getLogger("PaperShelf")


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_dir: Path, action: str, formatter: logging.Formatter) -> logging.Handler:
    """One DEBUG file per command run: ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``."""
    action_dir = log_dir / action
    action_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%m%d%H%M%S")
    handler = logging.FileHandler(action_dir / f"{action}_{stamp}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """(Re)configure the PaperShelf logger for one command.

    Lines look like ``10-18 14:02:11 [WARN] There is no source with id 3``.
    Calling this again replaces the previous handlers.

    Args:
        level: Console level name; unknown names fall back to INFO.
        action: Command name, used for the log file path.
        log_to_file: Mirror everything, DEBUG included, to a file.
        log_dir: Root directory of the log files.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=_FORMAT, datefmt=_DATEFMT)

    handlers = [_console_handler(console_level, formatter)]
    if log_to_file and action:
        handlers.append(_file_handler(Path(log_dir or "log"), action, formatter))

    for old in log.handlers[:]:
        log.removeHandler(old)
        old.close()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(min(handler.level for handler in handlers))
    log.propagate = False
