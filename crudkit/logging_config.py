"""
crudkit — Logging Setup
=========================

What:  One-call logging configuration for applications embedding crudkit.
How:   Configures the root logger with a stdout handler and a consistent
       format, then lowers the noise from third-party libraries.

crudkit itself only calls logging.getLogger(__name__); nothing here runs on
import. Applications call setup_logging() once at startup.
"""

import logging
import sys
from typing import Optional

from crudkit.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name override; defaults to settings.log_level.
    """
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
