import logging
import sys

from framer.config import settings

_FORMAT = "%(asctime)s :: %(levelname)s :: %(name)s :: %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger("framer")
    logger.setLevel((level or settings.log_level).upper())

    # stdout carries the CLI result, so logs go to stderr.
    if not logger.handlers:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(stderr_handler)
    return logger
