"""Core module exports."""

from hintplane.core.errors import (
    ConfigError,
    DocsError,
    ErrorCode,
    HintPlaneError,
    InternalError,
    ProtocolError,
)
from hintplane.core.logging import (
    clear_event_id,
    configure_logging,
    get_logger,
    get_event_id,
    set_event_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "DocsError",
    "ErrorCode",
    "HintPlaneError",
    "InternalError",
    "ProtocolError",
    # Logging
    "clear_event_id",
    "configure_logging",
    "get_logger",
    "get_event_id",
    "set_event_id",
]
