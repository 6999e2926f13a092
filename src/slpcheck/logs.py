from __future__ import annotations

import logging
from typing import Final, TextIO

LOG_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"
ROOT_LOGGER: Final[str] = "slpcheck"


class _SlpcheckHandler(logging.StreamHandler):
    pass


def configure_logging(level: str | int = "INFO", *, stream: TextIO | None = None) -> logging.Logger:
    """Attach one stream handler to the package logger; calling again replaces it."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _SlpcheckHandler):
            logger.removeHandler(handler)

    handler = _SlpcheckHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else str(level).upper())
    return logger
