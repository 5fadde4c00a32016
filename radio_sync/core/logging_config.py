import logging
import sys
from typing import Optional, Union

from radio_sync.config import LOG_LEVEL

# Third-party loggers that are too chatty at INFO.
QUIET_LOGGERS = ("urllib3", "httpx")


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure root logging to stdout, once.

    `level` defaults to the LOG_LEVEL setting. If handlers already exist
    (uvicorn, pytest) only the level is adjusted.
    """
    level = level if level is not None else LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(level)
