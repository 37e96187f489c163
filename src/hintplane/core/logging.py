"""Structured logging with per-event correlation and multi-output support.

Supports:
- Separate console vs file log levels
- Event correlation IDs (one per inbound engine event)
- Log file path tracking for error pointers

Console output goes to stderr by default: in ``hpl serve`` stdout carries
the wire protocol and must stay clean.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from hintplane.config.models import LoggingConfig, LogOutputConfig

_event_id: ContextVar[str | None] = ContextVar("event_id", default=None)

_log_file_path: Path | None = None

# Third-party loggers that are chatty at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def get_event_id() -> str | None:
    return _event_id.get()


def set_event_id(event_id: str | None = None) -> str:
    """Bind a correlation ID for the event being handled, generating one if needed."""
    eid = event_id or uuid4().hex[:12]
    _event_id.set(eid)
    return eid


def clear_event_id() -> None:
    _event_id.set(None)


def get_log_file_path() -> Path | None:
    """First file destination of the current configuration, if any."""
    return _log_file_path


def _add_event_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if eid := get_event_id():
        event_dict["event_id"] = eid
    return event_dict


def _level(name: str | None, default: int = logging.INFO) -> int:
    if not name:
        return default
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog over stdlib logging.

    Args:
        config: Logging configuration with outputs; wins over the simple params.
        json_format: Render the single default output as JSON.
        level: Root level for the single default output.
    """
    from hintplane.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level.upper(),  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level(config.level)
    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_event_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration (e.g. serve after the CLI group) must take effect.
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    global _log_file_path
    _log_file_path = None
    for output in config.outputs:
        handler = _create_handler(output.destination)
        handler.setLevel(_level(output.level or config.level, root_level))
        handler.setFormatter(_formatter(output, shared))
        root.addHandler(handler)
        if _log_file_path is None and output.destination not in ("stderr", "stdout"):
            _log_file_path = Path(output.destination)


def _formatter(
    output: LogOutputConfig,
    shared: list[structlog.types.Processor],
) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        colors = output.destination == "stderr" and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)


def _create_handler(destination: str) -> logging.Handler:
    """Handler for stderr, stdout, or an absolute file path."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
