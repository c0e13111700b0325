"""
Logging setup for the user record service.

Handlers are attached to the root logger once per process; the level is
applied on every call so the CLI can override what the environment asked for.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVEL_NAMES = ("critical", "error", "warning", "info", "debug")

_handlers: list[logging.Handler] = []


def parse_level(name: str | None) -> Optional[int]:
    """Numeric level for one of LEVEL_NAMES (any case), else None."""
    value = (name or "").strip().lower()
    if value not in LEVEL_NAMES:
        return None
    return getattr(logging, value.upper())


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Set the root level and, on first use, attach console/file handlers.

    Unknown level names fall back to INFO. ``logfile`` only matters on the
    first call; later calls keep the handlers already installed.
    """
    root = logging.getLogger()
    numeric_level = parse_level(level)
    root.setLevel(logging.INFO if numeric_level is None else numeric_level)
    if _handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    _handlers.append(logging.StreamHandler())
    if logfile:
        _handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in _handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
