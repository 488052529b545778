"""Logging setup: everything goes to a rotating file, never to the terminal."""

import logging
import os
import traceback
from logging.handlers import RotatingFileHandler
from typing import Optional

from platformdirs import user_log_dir

LOG_DIR = user_log_dir("chuck")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logger(level: str = "WARNING", log_dir: Optional[str] = None) -> str:
    """Attach a rotating file handler to the ``chuck`` logger and return its path."""
    log_dir = log_dir or LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, "chuck.log")

    # max of 3 backups, max size of 1MB
    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger("chuck")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.propagate = False
    return log_path


def log_exception(exc: BaseException, context: str = "") -> None:
    """Write the full traceback of *exc* to the log."""
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    msg = f"{context}\n{tb}" if context else tb
    logging.getLogger("chuck").error(msg)
