from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

LOGLEVEL_ENV_VAR = "LOGLEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: LogLevel | None = None, verbose: bool = False) -> str:
    if verbose:
        return "DEBUG"
    return (level or os.environ.get(LOGLEVEL_ENV_VAR, "INFO")).upper()


def setup_logging(level: LogLevel | None = None, verbose: bool = False) -> None:
    """Install coloredlogs on the root logger."""
    resolved = resolve_level(level, verbose)

    coloredlogs.install(
        level=resolved,
        fmt=DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT,
    )

    logging.getLogger(__name__).debug("Log level set to %s", resolved)
