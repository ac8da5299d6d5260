from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..constants import LOG_FILE
from .paths import data_dir


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Marks handlers installed here so a second call replaces them
_OWNED = "_ksp_mod_admin_handler"


def default_log_path() -> Path:
    """Default log file path: `<data dir>/logs/ksp_mod_admin.log`."""
    return data_dir() / "logs" / LOG_FILE


def configure_logging(level: int = logging.INFO, *, console: bool = False) -> None:
    log_path = default_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        logging.FileHandler(log_path, encoding="utf-8"),
    ]
    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handlers.append(stream)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _OWNED, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        if handler.formatter is None:
            handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        root.addHandler(handler)
    root.setLevel(level)
