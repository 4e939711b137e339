"""Structured JSON logging built on python-json-logger."""

from __future__ import annotations

import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

DEFAULT_LOGGER = "nachagen"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class NachaJsonFormatter(JsonFormatter):
    """JSON formatter that always emits timestamp, level, logger and module."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["module"] = record.module


def setup_logger(
    name: str = DEFAULT_LOGGER,
    level: str | None = None,
    format_type: str = "json",
) -> logging.Logger:
    """Configure ``name`` with a single stdout handler.

    Args:
        name: Logger name. Child loggers (``nachagen.models...``) inherit it.
        level: Log level name; falls back to ``NACHA_LOG_LEVEL`` then INFO.
        format_type: ``"json"`` or ``"text"``.
    """
    level_name = level or os.getenv("NACHA_LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(level_name.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if format_type == "json":
        formatter: logging.Formatter = NachaJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER) -> logging.Logger:
    """Return a logger; module loggers under ``nachagen.`` share the root's handler."""
    return logging.getLogger(name)
