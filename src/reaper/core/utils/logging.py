from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_LOGGER_NAME = "reaper"
_REAPER_HANDLER: logging.Handler | None = None


def configure_logging(*, verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single stderr handler to the ``reaper`` logger.

    DEBUG when ``verbose``, WARNING otherwise. Idempotent per-process: calling
    it again replaces the previously installed handler instead of stacking.
    """
    global _REAPER_HANDLER

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    if _REAPER_HANDLER is not None:
        logger.removeHandler(_REAPER_HANDLER)
        _REAPER_HANDLER.close()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("  [%(levelname)s] %(message)s"))
    logger.addHandler(handler)
    _REAPER_HANDLER = handler
    return logger


__all__ = ["configure_logging"]
