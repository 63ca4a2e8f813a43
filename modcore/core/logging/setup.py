# modcore/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path

from .formatters import DevFormatter, JsonFormatter

__all__ = [
    "NO_PROPAGATE",
    "configureLogging",
]



# Disable propagation from chatty libraries
NO_PROPAGATE = [
    "httpcore.connection", "httpcore.http11", "httpcore.http2",
    "hpack", "httpx",
]



def configureLogging(*, devMode: bool = True, logFile: Path | str | None = None) -> None:
    """
    Initiate the global logging configuration.

    Dev:
      - Console pretty logs (DEBUG)
      - JSON file log (DEBUG), when logFile is given

    Prod:
      - Console INFO
      - JSON file logs INFO with rotation, when logFile is given
    """
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = False

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    root.addHandler(consoleHandler)

    if logFile is not None:
        Path(logFile).parent.mkdir(parents=True, exist_ok=True)
        fileHandler = logging.handlers.RotatingFileHandler(
            str(logFile),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)

    # Per-logger tweaks (reduce noise)
    logging.getLogger("httpx").setLevel(logging.WARNING)