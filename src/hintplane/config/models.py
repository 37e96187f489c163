"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (HINTPLANE__SECTION__KEY)
3. Project YAML (.hintplane/config.yaml)
4. Global YAML (~/.config/hintplane/config.yaml)
5. Built-in defaults (this file)

Examples:
    HINTPLANE__LOGGING__LEVEL=DEBUG
    HINTPLANE__DOCS__TIMEOUT_SEC=30
    HINTPLANE__INDEX__MEMOIZE=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from hintplane.config.constants import DOCS_BASE_URL, DOCS_BUNDLE_FILENAME

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        HINTPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every index rebuild.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DocsConfig(BaseModel):
    """Library documentation fetch configuration.

    Env vars:
        HINTPLANE__DOCS__BASE_URL: Package documentation root
        HINTPLANE__DOCS__BUNDLE_FILENAME: Documentation bundle file name
        HINTPLANE__DOCS__TIMEOUT_SEC: Per-request HTTP timeout
        HINTPLANE__DOCS__MAX_CONCURRENT_FETCHES: Parallel bundle downloads
    """

    base_url: str = Field(
        default=DOCS_BASE_URL,
        description="Root URI that library identifiers are appended to.",
    )
    bundle_filename: str = Field(
        default=DOCS_BUNDLE_FILENAME,
        description="File name of the per-library documentation bundle.",
    )
    timeout_sec: float = Field(
        default=20.0,
        description="HTTP timeout for a single bundle download.",
    )
    max_concurrent_fetches: int = Field(
        default=4,
        description="Bundles downloaded in parallel for one packages-needed request.",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URI: {v}")
        return v if v.endswith("/") else v + "/"

    @field_validator("max_concurrent_fetches")
    @classmethod
    def validate_max_concurrent_fetches(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_concurrent_fetches must be >= 1, got {v}")
        return v


class IndexConfig(BaseModel):
    """Token index configuration.

    Env vars:
        HINTPLANE__INDEX__MEMOIZE: Cache per-module hint generation
        HINTPLANE__INDEX__MEMO_SIZE: Max cached (module, import) entries
    """

    memoize: bool = Field(
        default=True,
        description="Reuse per-module hints across rebuilds when the module "
        "and its import policy are unchanged. Output is identical either way.",
    )
    memo_size: int = Field(
        default=4096,
        description="Max cached (module, import) entries.",
    )


class HintPlaneConfig(BaseModel):
    """Root configuration for HintPlane."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
