from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL_ENV = "TMS_LOG_LEVEL"


def _resolve_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a project-level logger; level follows TMS_LOG_LEVEL (default INFO)."""
    logging.basicConfig(level=_resolve_level(), format=LOG_FORMAT)
    return logging.getLogger(name)
