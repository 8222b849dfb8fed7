#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/logging_utils.py
"""Logging setup for the mdscroll command line.

Rendered Markdown goes to stdout, so every log record is sent to stderr and,
when requested, appended to a log file as well.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from mdscroll.exceptions import ConfigError

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_level(log_level: int | str, trace_mode: bool = False) -> int:
    """Map a level name or number to a logging level.

    Trace mode always means DEBUG. Unknown names resolve to INFO.
    """
    if trace_mode:
        return logging.DEBUG
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root handlers with a stderr handler and an optional file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``
    log_file : str, optional
        File that receives a copy of every record, opened for appending
    trace_mode : bool, default False
        Log at DEBUG with timestamps and logger names

    Returns
    -------
    logging.Logger
        The configured root logger

    Raises
    ------
    ConfigError
        If the log file cannot be opened

    """
    level = resolve_level(log_level, trace_mode)
    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt=TRACE_DATE_FORMAT if trace_mode else None,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e}", log_file, e) from e

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file:
        root_logger.debug("Logging to file: %s", log_file)
    return root_logger
