"""Core module exports."""

from archscan.core.errors import (
    ArchScanError,
    CacheError,
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ReadError,
)
from archscan.core.logging import configure_logging, get_logger
from archscan.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ArchScanError",
    "CacheError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ParseError",
    "ReadError",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "pluralize",
    "progress",
    "status",
]
