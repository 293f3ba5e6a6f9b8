"""Loguru sink setup."""

from __future__ import annotations

import sys

from loguru import logger

from minidash.config.schema import Config
from minidash.utils.helpers import ensure_dir


def setup_logging(config: Config, *, tui: bool) -> None:
    """Route logs for the current mode.

    While the TUI owns the terminal, anything written to stderr would tear the
    screen, so logs go to a rotating file instead.
    """
    logger.remove()
    level = config.logging.level.upper()
    if tui:
        path = config.log_path
        ensure_dir(path.parent)
        logger.add(
            path,
            level=level,
            rotation="1 MB",
            retention=3,
            enqueue=True,
        )
    else:
        logger.add(sys.stderr, level=level)
