"""
Logging setup.
"""

from __future__ import annotations

import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    # uvicorn's access log duplicates the request logging middleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
