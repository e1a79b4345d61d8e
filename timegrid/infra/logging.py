"""Logging configuration for timegrid hosts."""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

__all__ = ["JsonFormatter", "LoggingConfig", "configure_logging", "setup_logging", "shutdown_logging"]

_QUEUE_LISTENER: QueueListener | None = None

_STANDARD_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Root logging policy."""

    level_name: str = "INFO"
    console_format: str = "text"
    file_path: str | None = None
    file_format: str = "json"


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``event`` is the leading token of the ``event_name key=value ...`` message
    convention. Geometry invariant context passed as ``extra={"invariant": ...}``
    gets its own key; other extras land under ``fields``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": message.split(" ", 1)[0],
            "msg": message,
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        invariant_fields = extras.pop("invariant", None)
        if invariant_fields is not None:
            payload["invariant"] = invariant_fields
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional async file streaming."""
    global _QUEUE_LISTENER

    shutdown_logging()

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Stop the file streaming listener, flushing queued records."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def setup_logging() -> str | None:
    """Configure logging from ``TIMEGRID_LOG_LEVEL``/``LOG_LEVEL``, ``LOG_FORMAT`` and ``TIMEGRID_LOG_DIR``.

    A JSON-lines run log is written only when ``TIMEGRID_LOG_DIR`` is set.
    Returns the run log path, if any.
    """
    level_name = os.getenv("TIMEGRID_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    console_format = os.getenv("LOG_FORMAT", "text").lower()
    file_path = _resolve_run_log_file_path()
    configure_logging(
        LoggingConfig(
            level_name=level_name,
            console_format=console_format,
            file_path=file_path,
            file_format="json",
        )
    )
    if file_path is not None:
        logging.getLogger(__name__).info("logging_file=%s", file_path)
    return file_path


def _resolve_run_log_file_path() -> str | None:
    configured = os.getenv("TIMEGRID_LOG_DIR", "").strip()
    if not configured:
        return None
    base_dir = Path(configured)
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"timegrid_run_{stamp}.jsonl")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
