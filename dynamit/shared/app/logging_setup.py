"""Process-wide logging setup.

The terminal belongs to the TUI, so records only ever go to a file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dynamit.shared.app.runtime import RuntimeConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
DEFAULT_DEBUG_LOG = Path(".dynamit") / "debug.log"


def resolve_log_path(runtime: RuntimeConfig) -> Path | None:
    if runtime.log_file is not None:
        return runtime.log_file
    if runtime.debug_mode:
        return DEFAULT_DEBUG_LOG
    return None


def configure_logging(runtime: RuntimeConfig) -> Path | None:
    """Attach a file handler to the ``dynamit`` logger; returns the log path."""
    logger = logging.getLogger("dynamit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    path = resolve_log_path(runtime)
    if path is None:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.WARNING)
        return None

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if runtime.debug_mode else logging.INFO)
    return path
