"""filetrack error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Tracking
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FROZEN = 2003

    # Tracking (3xxx)
    PATH_OUTSIDE_ROOT = 3001


@dataclass(frozen=True, slots=True)
class FileTrackError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(FileTrackError):
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
    def frozen(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FROZEN,
            message=f"'{field}' can no longer be changed once tracking has started",
            details={"field": field},
        )


class TrackerError(FileTrackError):
    """Errors raised at the tracker's public path boundary."""

    @classmethod
    def outside_root(cls, path: str, root: str) -> "TrackerError":
        return cls(
            code=ErrorCode.PATH_OUTSIDE_ROOT,
            message=f"Path {path} is not under project root {root}",
            details={"path": path, "root": root},
        )
