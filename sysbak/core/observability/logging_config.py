"""
Logging configuration — central setup for the CLI.

Called once at startup by sysbak.main. Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  SYSBAK_LOG_LEVEL  >  WARNING

Optional file output via SYSBAK_LOG_FILE / SYSBAK_LOG_FILE_LEVEL, useful
for keeping a record of long install runs.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "SYSBAK_LOG_LEVEL"
ENV_FILE = "SYSBAK_LOG_FILE"
ENV_FILE_LEVEL = "SYSBAK_LOG_FILE_LEVEL"

# WARNING and above — the message is all the operator needs
_FMT_MINIMAL = "%(message)s"

# INFO — progress lines with a clock
_FMT_PROGRESS = "%(asctime)s %(message)s"

# DEBUG and file output — where each record came from
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_CLOCK = "%H:%M:%S"
_DATEFMT_FULL = "%Y-%m-%d %H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file. Defaults to SYSBAK_LOG_FILE.
        log_file_level: Level for the file handler. Defaults to
            SYSBAK_LOG_FILE_LEVEL, then to ``level``.
    """
    console_level = _parse_level(level)
    log_file = log_file or os.environ.get(ENV_FILE)
    log_file_level = log_file_level or os.environ.get(ENV_FILE_LEVEL)

    if console_level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_CLOCK)
    elif console_level <= logging.INFO:
        formatter = logging.Formatter(_FMT_PROGRESS, datefmt=_DATEFMT_CLOCK)
    else:
        formatter = logging.Formatter(_FMT_MINIMAL)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FULL))
        root.addHandler(fh)

    root.setLevel(root_level)

    # Errors inside logging itself are never raised
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
