"""structlog + stdlib logging wiring for the addon process and uvicorn."""

from __future__ import annotations

import atexit
import copy
import logging
import logging.config
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Optional

import structlog

from voirdrama.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Per-request chatter of the HTTP stack; only shown at DEBUG.
_HTTP_STACK_LOGGERS = ("httpx", "httpcore")

_listener: Optional[QueueListener] = None


def _strip_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Uvicorn duplicates "event" as "color_message".
    event_dict.pop("color_message", None)
    return event_dict


def _stamp_record_time(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Use the LogRecord's creation time for stdlib records, not the emit time."""
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = created.isoformat().replace("+00:00", "Z")
    return event_dict


def _formatter_kwargs(config: AppConfig) -> dict[str, Any]:
    """Arguments for structlog's ProcessorFormatter, shared by both wiring paths."""
    renderer: structlog.typing.Processor
    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    return {
        "foreign_pre_chain": [
            _strip_color_message,
            structlog.contextvars.merge_contextvars,
            _stamp_record_time,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ],
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    }


def _http_stack_level(config: AppConfig) -> str:
    return "DEBUG" if config.log_level == "DEBUG" else "WARNING"


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """
    dictConfig for uvicorn.run(log_config=...).

    Both uvicorn handlers render through structlog. The configured level
    applies to uvicorn's loggers and the root logger.
    """
    level = config.log_level
    loggers: dict[str, Any] = {
        "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
        "uvicorn.error": {"level": level},
        "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
    }
    for name in _HTTP_STACK_LOGGERS:
        loggers[name] = {"level": _http_stack_level(config)}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                **_formatter_kwargs(config),
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "stream": "ext://sys.stderr",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
        "root": {"handlers": ["default"], "level": level},
    }


class _EventDictQueueHandler(QueueHandler):
    """Enqueue a shallow copy so ``record.msg`` stays a structlog event dict."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        return copy.copy(record)


def _stop_listener() -> None:
    global _listener
    if _listener is None:
        return
    try:
        _listener.stop()
    finally:
        _listener = None


def _route_through_queue(config: AppConfig) -> None:
    """
    Send every stdlib record through a queue drained by a background thread,
    so request handlers never block on stream writes.
    """
    global _listener
    _stop_listener()

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(**_formatter_kwargs(config)))

    records: queue.Queue[logging.LogRecord] = queue.Queue()
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_EventDictQueueHandler(records))
    root.setLevel(config.log_level)

    # Loggers configured by dictConfig (uvicorn's) now propagate to the queue.
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers.clear()
        existing.propagate = True
        existing.setLevel(config.log_level)
    for name in _HTTP_STACK_LOGGERS:
        logging.getLogger(name).setLevel(_http_stack_level(config))

    _listener = QueueListener(records, handler, respect_handler_level=True)
    _listener.start()
    atexit.register(_stop_listener)


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """
    Configure structlog and stdlib logging for this process.

    Returns the dictConfig to hand to uvicorn.
    """
    structlog.configure(
        processors=[
            _strip_color_message,
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_config = build_logging_config(config)
    logging.config.dictConfig(log_config)
    _route_through_queue(config)

    log.info("logging_configured", log_format=config.log_format, log_level=config.log_level)
    return log_config
