"""Logging configuration: console (rich or plain) plus an optional log file."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def expand_log_path(template: str, now: datetime | None = None) -> Path:
    """Expand strftime codes in *template*, e.g. ``logpress-%Y%m%d.log``."""
    return Path((now or datetime.now()).strftime(template)).expanduser()


def configure_logging(
    *,
    verbose: bool = False,
    log_file: str | None = None,
    use_rich: bool = False,
) -> Path | None:
    """Install handlers on the ``logpress`` logger. Returns the log file path, if any.

    Safe to call repeatedly: handlers from a previous call are replaced.
    """
    root = logging.getLogger("logpress")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    console: logging.Handler
    if use_rich:
        console = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        console.setFormatter(logging.Formatter("%(message)s"))
    else:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root.addHandler(console)

    if not log_file:
        return None
    path = expand_log_path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(file_handler)
    return path
