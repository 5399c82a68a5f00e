"""Logging setup for the recdiff command line."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/recdiff/logging_utils.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from recdiff.exceptions import ValidationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric logging level.

    Raises
    ------
    ValidationError
        If ``log_level`` is not one of the standard level names

    """
    if isinstance(log_level, int):
        return log_level
    name = str(log_level).upper()
    if name not in LOG_LEVELS:
        raise ValidationError(
            f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}",
            parameter_name="log_level",
            parameter_value=log_level,
        )
    return getattr(logging, name)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure handlers on the ``recdiff`` package logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names and force DEBUG level.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    resolved_level = logging.DEBUG if trace_mode else resolve_log_level(log_level)

    package_logger = logging.getLogger("recdiff")
    package_logger.setLevel(resolved_level)
    package_logger.handlers.clear()
    package_logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
