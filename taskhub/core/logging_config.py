"""Logging setup for the API process."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from taskhub.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure the root logger once; repeated calls only adjust the level."""
    global _configured

    level_name = (level_name or settings.LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)

    # SQL echo is controlled by DEBUG; keep the engine logger quiet otherwise
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).info("Logging initialized at %s", level_name)
