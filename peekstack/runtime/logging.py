"""Logging for the ``peekstack`` logger tree.

Handlers go on the package logger, never on the root logger: the host editor
owns the root. Only handlers installed here are replaced on reconfiguration.
"""

from __future__ import annotations

import json
import logging
import queue
from collections.abc import Mapping
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from peekstack.api.logging import LoggingConfig
from peekstack.runtime.config import resolve_log_level_name

PACKAGE_LOGGER = "peekstack"

# ``extra=`` keys used by overlay code; JSON lines carry them at the top level.
OVERLAY_FIELDS = ("root_window", "window", "content", "phase", "failure_kind", "geometry_source")

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_QUEUE_LISTENER: QueueListener | None = None
_INSTALLED_HANDLERS: list[logging.Handler] = []

_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, overlay context fields first."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRIBUTES}
        for key in OVERLAY_FIELDS:
            if key in extras:
                payload[key] = extras.pop(key)
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Install console and optional file handlers on the package logger."""
    global _QUEUE_LISTENER

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed_handlers(package_logger)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    package_logger.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))
    package_logger.propagate = config.propagate

    if len(handlers) == 1:
        installed: logging.Handler = handlers[0]
    else:
        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        installed = QueueHandler(log_queue)
        _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
        _QUEUE_LISTENER.start()
    package_logger.addHandler(installed)
    _INSTALLED_HANDLERS.append(installed)
    return package_logger


def setup_logging(*, env: Mapping[str, str] | None = None) -> logging.Logger:
    """Install text console logging unless the package logger already has handlers."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return package_logger
    return configure_logging(
        LoggingConfig(level_name=resolve_log_level_name(default="INFO", env=env))
    )


def shutdown_logging() -> None:
    """Detach installed handlers and stop the background file listener."""
    _remove_installed_handlers(logging.getLogger(PACKAGE_LOGGER))


def _remove_installed_handlers(package_logger: logging.Logger) -> None:
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        for handler in _QUEUE_LISTENER.handlers:
            handler.close()
        _QUEUE_LISTENER = None
    for handler in _INSTALLED_HANDLERS:
        package_logger.removeHandler(handler)
        handler.close()
    _INSTALLED_HANDLERS.clear()


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
