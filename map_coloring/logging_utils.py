from __future__ import annotations

import logging

from .config import LOG_LEVEL

LOGGER_NAME = "map_coloring"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger (or a child of it).

    The root ``map_coloring`` logger gets a stream handler the first time it is
    requested; child loggers propagate to it.
    """
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s"))
        root.addHandler(handler)
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    if not name or name == LOGGER_NAME:
        return root
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
