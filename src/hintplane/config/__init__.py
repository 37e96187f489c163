"""Config module exports."""

from hintplane.config.loader import HintPlaneSettings, load_config
from hintplane.config.models import (
    DocsConfig,
    HintPlaneConfig,
    IndexConfig,
    LoggingConfig,
)

__all__ = [
    "load_config",
    "HintPlaneConfig",
    "HintPlaneSettings",
    "DocsConfig",
    "IndexConfig",
    "LoggingConfig",
]
