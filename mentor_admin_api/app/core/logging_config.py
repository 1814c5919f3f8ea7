"""
Logging setup for the API process.

``setup_logging`` installs console (and optionally file) output on the
root logger via ``logging.basicConfig`` and applies ``LOG_LEVEL`` to the
``mentor_admin_api`` logger hierarchy.  When the host process (an ASGI
server, pytest) already configured the root logger, its handlers are
left alone and only the package level is applied.
"""

import logging
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "mentor_admin_api"


def build_handlers(logfile: Optional[str] = None) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure application logging.

    Parameters
    ----------
    level : str
        Level name for the ``mentor_admin_api`` loggers (e.g. ``"DEBUG"``).
        Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Also write records to this file.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=numeric_level,
            format=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            handlers=build_handlers(logfile),
        )
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)
