"""demokit logging configuration.

demokit logs through the standard library under the ``demokit`` logger
hierarchy. Library code only creates module loggers; handlers are installed
by the CLI entry point via :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from demokit.constants import LOG_LEVEL_ENV, TOOL_NAME

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, default: str = "WARNING") -> None:
    """Configure demokit logging.

    Args:
        level: Optional override for `DEMOKIT_LOG_LEVEL`.
        default: Level used when neither the override nor the env var is set.
    """
    if level:
        os.environ[LOG_LEVEL_ENV] = level

    resolved = os.getenv(LOG_LEVEL_ENV, default).upper()
    logger = logging.getLogger(TOOL_NAME)
    logger.setLevel(resolved)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
