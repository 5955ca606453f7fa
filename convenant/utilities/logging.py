"""Logging setup for applications embedding the engine.

Library modules only create module-level loggers; handlers and levels are
configured once here by the application.
"""

import logging
import sys

from convenant.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to the configured log_level.
    """
    level_name = (level or get_settings().log_level).upper()

    root = logging.getLogger()
    root.setLevel(level_name)

    # Replace handlers so repeated calls don't duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
