"""File logging for the TUI session.

The terminal belongs to the UI, so log records go to a file under the
platform log directory unless ``--log-file`` points elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "lazydisk.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"

_HANDLER_MARKER = "_lazydisk_handler"


def configure_logging(level: str = "INFO", log_path: Path | None = None) -> Path | None:
    """Attach one file handler to the ``lazydisk`` logger.

    Repeated calls replace the previous handler. Returns the log path, or
    ``None`` when the file cannot be opened (records are then discarded).
    """
    package_logger = logging.getLogger(APP_NAME)
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)
            handler.close()

    target = log_path if log_path is not None else DEFAULT_LOG_PATH
    opened: Path | None = target
    handler: logging.Handler
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
        opened = None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)

    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False
    return opened


__all__ = ["DEFAULT_LOG_PATH", "configure_logging"]
