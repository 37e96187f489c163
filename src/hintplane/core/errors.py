"""HintPlane error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Docs
- 4xxx: Protocol
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Docs (3xxx)
    DOCS_FETCH_FAILED = 3001
    DOCS_DECODE_FAILED = 3002

    # Protocol (4xxx)
    PROTOCOL_INVALID_MESSAGE = 4001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class HintPlaneError(Exception):
    """Base error with structured context for outbound error messages."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'DOCS_FETCH_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(HintPlaneError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class DocsError(HintPlaneError):
    """Library documentation fetch/decode errors.

    Fetch failures are terminal for the request; the caller reports them and
    leaves the documentation store untouched.
    """

    @classmethod
    def fetch_failed(cls, url: str, reason: str) -> "DocsError":
        return cls(
            code=ErrorCode.DOCS_FETCH_FAILED,
            message=f"Failed to fetch documentation from {url}: {reason}",
            retryable=True,
            details={"url": url, "reason": reason},
        )

    @classmethod
    def decode_failed(cls, url: str, reason: str) -> "DocsError":
        return cls(
            code=ErrorCode.DOCS_DECODE_FAILED,
            message=f"Failed to decode documentation from {url}: {reason}",
            details={"url": url, "reason": reason},
        )


class ProtocolError(HintPlaneError):
    """Malformed inbound messages."""

    @classmethod
    def invalid_message(cls, reason: str, **details: Any) -> "ProtocolError":
        return cls(
            code=ErrorCode.PROTOCOL_INVALID_MESSAGE,
            message=f"Invalid message: {reason}",
            details=details,
        )


class InternalError(HintPlaneError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
