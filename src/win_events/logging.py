"""Structured JSON logging helpers for win_events."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging import Logger
from typing import Dict

_LOGGER_NAME = "win_events"
LEVEL_ENV = "WIN_EVENTS_LOG_LEVEL"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        payload = {
            "ts": ts,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        if hasattr(record, "payload"):
            payload["payload"] = getattr(record, "payload")
        return json.dumps(payload, ensure_ascii=False, default=repr)


def get_logger(name: str | None = None) -> Logger:
    """Return a module level logger configured for structured JSON output.

    New loggers start at the level named by ``WIN_EVENTS_LOG_LEVEL`` (default
    INFO). A later :func:`win_events.config.configure` call overrides it.
    """

    logger_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        logger.addHandler(handler)
        level = os.environ.get(LEVEL_ENV, "INFO").strip().upper()
        logger.setLevel(getattr(logging, level, logging.INFO))
    return logger


def set_level(level: str) -> None:
    """Apply ``level`` to every logger created through :func:`get_logger`."""

    value = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger(_LOGGER_NAME)
    root.setLevel(value)
    prefix = f"{_LOGGER_NAME}."
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(value)


def log_event(
    logger: Logger, event: str, payload: Dict[str, object] | None = None, level: int = logging.INFO
) -> None:
    """Log an event payload in a consistent JSON format."""

    if not logger.isEnabledFor(level):
        return
    payload = payload or {}
    extra = {"event": event, "payload": payload}
    logger.log(level, f"event={event}", extra=extra)
