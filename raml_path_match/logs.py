"""Logging setup for raml_path_match."""

import logging
import sys
from typing import IO, Optional

FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"


def _already_configured(log: logging.Logger, stream: IO) -> bool:
    if not log.handlers:
        return False

    for handler in log.handlers:
        if isinstance(handler, logging.StreamHandler):
            if handler.stream == stream:
                return True

    return False


def configure_logging(
    debug: bool = False, stream: Optional[IO] = None
) -> logging.Logger:
    """Send package logs to ``stream`` (stdout by default)."""
    log = logging.getLogger("raml_path_match")
    stream = stream or sys.stdout
    if debug:
        level = logging.DEBUG
    else:
        level = logging.ERROR
    log.setLevel(level)

    if _already_configured(log, stream):
        return log

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(FORMAT_STRING))
    log.propagate = False
    log.addHandler(handler)
    return log
