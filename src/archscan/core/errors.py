"""archscan error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Scan (read / parse / dispatch)
- 4xxx: Cache
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

    # Scan (3xxx)
    PARSE_FAILED = 3001
    READ_FAILED = 3002
    UNSUPPORTED_DIALECT = 3003

    # Cache (4xxx)
    CACHE_CORRUPT = 4001
    CACHE_STALE = 4002
    CACHE_WRITE_FAILED = 4003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ArchScanError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ArchScanError):
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


class ParseError(ArchScanError):
    """A source file could not be turned into a syntax tree. Fatal for a scan."""

    @classmethod
    def failed(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_FAILED,
            message=f"Error parsing {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def unsupported(cls, path: str) -> "ParseError":
        return cls(
            code=ErrorCode.UNSUPPORTED_DIALECT,
            message=f"No dialect registered for {path}",
            details={"path": path},
        )


class ReadError(ArchScanError):
    """A source file could not be read. The file is skipped."""

    @classmethod
    def failed(cls, path: str, reason: str) -> "ReadError":
        return cls(
            code=ErrorCode.READ_FAILED,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class CacheError(ArchScanError):
    """Cache envelope problems."""

    @classmethod
    def corrupt(cls, path: str, reason: str) -> "CacheError":
        return cls(
            code=ErrorCode.CACHE_CORRUPT,
            message=f"Cache at {path} is unreadable: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def stale(cls, path: str, expected: str, found: str | None) -> "CacheError":
        return cls(
            code=ErrorCode.CACHE_STALE,
            message=f"Cache at {path} belongs to a different scan",
            details={"path": path, "expected": expected, "found": found},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "CacheError":
        return cls(
            code=ErrorCode.CACHE_WRITE_FAILED,
            message=f"Failed to write cache at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(ArchScanError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
