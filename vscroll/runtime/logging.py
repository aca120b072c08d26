"""Logging setup for vscroll consumers."""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from vscroll.api.logging import JsonFormatter, LoggingConfig
from vscroll.runtime.config import get_virtualization_config

_QUEUE_LISTENER: QueueListener | None = None


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional queued file streaming."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

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


def setup_logging() -> None:
    """Configure logging from the active config if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    config = get_virtualization_config()
    configure_logging(
        LoggingConfig(
            level_name=config.log_level,
            console_format=config.log_format,
            file_path=config.log_file,
            file_format="json",
        )
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the `vscroll` namespace."""
    if name == "vscroll" or name.startswith("vscroll."):
        return logging.getLogger(name)
    return logging.getLogger(f"vscroll.{name}")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
