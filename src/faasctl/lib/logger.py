"""
Dual-mode logging for faasctl.

Provides human-readable console logs by default and JSON structured logs
for CI systems that ingest machine-readable output.
"""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "faasctl"


def setup_logger(
    name: str = LOGGER_NAME,
    level: str | None = None,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Setup the faasctl logger.

    Mode is determined by FAASCTL_LOG_FORMAT environment variable unless
    given explicitly:
    - text: Human-readable console logging with timestamps (default)
    - json: JSON structured logging

    Parameters
    ----------
    name : str, optional
        Logger name, by default "faasctl". Child loggers created with
        logging.getLogger(__name__) inherit its handler.
    level : str or None, optional
        Logging level name. Falls back to FAASCTL_LOG_LEVEL, then WARNING.
    log_format : str or None, optional
        "text" or "json". Falls back to FAASCTL_LOG_FORMAT, then "text".

    Returns
    -------
    logging.Logger
        Configured logger instance

    Examples
    --------
    >>> logger = setup_logger(level="DEBUG")
    >>> logger.debug("Loaded stack file")

    Environment Variables
    ---------------------
    FAASCTL_LOG_FORMAT : str
        Output format: "text" or "json"
    FAASCTL_LOG_LEVEL : str
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: WARNING)
    """
    logger = logging.getLogger(name)

    level_name = (level or os.getenv("FAASCTL_LOG_LEVEL", "WARNING")).upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    # Remove existing handlers to avoid duplicates if called multiple times
    logger.handlers.clear()

    log_format = (log_format or os.getenv("FAASCTL_LOG_FORMAT", "text")).lower()

    # Logs go to stderr so they never mix with command output on stdout
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    if log_format == "json":
        formatter = _create_json_formatter()
    else:
        formatter = _create_text_formatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def _create_json_formatter() -> logging.Formatter:
    """
    Create JSON formatter.

    Uses python-json-logger so that extra fields passed via
    logger.info(..., extra={...}) become top-level JSON keys.
    """

    class JsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super().add_fields(log_record, record, message_dict)
            if "levelname" in log_record:
                log_record["severity"] = log_record.pop("levelname")
            if record.threadName and record.threadName != "MainThread":
                log_record["thread"] = record.threadName

    return JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def _create_text_formatter() -> logging.Formatter:
    """Create human-readable formatter for console output."""
    return logging.Formatter(
        fmt="%(asctime)s %(name)s %(levelname)s [%(threadName)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
