"""Logging setup shared by the client entrypoints."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("scrambler").setLevel(resolved)
    # httpx logs every request at INFO, which floods the poll loop.
    logging.getLogger("httpx").setLevel(max(resolved, logging.WARNING))
