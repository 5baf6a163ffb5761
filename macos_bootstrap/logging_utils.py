from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "~/Library/Logs/macos-bootstrap.log"
FALLBACK_LOG_NAME = "macos-bootstrap.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(message)s"

_MARK = "_macos_bootstrap_log_path"


def _open_log_file(requested: str) -> Tuple[logging.FileHandler, str]:
    """Open requested, or a file in the working directory if that fails."""
    try:
        Path(requested).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested), requested
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


class _ConsoleFormatter(logging.Formatter):
    # Progress lines read as plain narration; problems keep their level.
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {msg}"
        return msg


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send the step narration to the console and a timestamped log file.

    Safe to call more than once; later calls return the path chosen first.
    Returns the log file actually in use.
    """

    root = logging.getLogger()
    root.setLevel(level)

    configured = getattr(root, _MARK, None)
    if configured:
        return configured

    requested = os.path.expanduser(log_path)
    file_handler, chosen = _open_log_file(requested)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_ConsoleFormatter(CONSOLE_FORMAT))
        root.addHandler(console)

    setattr(root, _MARK, chosen)
    if chosen != requested:
        logging.getLogger(__name__).warning("Cannot write %s; logging to %s", requested, chosen)
    return chosen
