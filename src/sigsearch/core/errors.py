"""sigsearch error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Match (item/query data and comparison failures)

"Different" is an ordinary comparison verdict, never an error. The only
failure the matcher itself raises is an unresolved ``Self`` reference.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Match (3xxx)
    UNRESOLVED_SELF_TYPE = 3001
    ITEM_FORMAT_ERROR = 3002
    QUERY_FORMAT_ERROR = 3003


@dataclass(frozen=True, slots=True)
class SigSearchError(Exception):
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


class ConfigError(SigSearchError):
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


class UnresolvedSelfTypeError(SigSearchError):
    """A candidate mentions ``Self`` but no ``Self = T`` predicate is in scope.

    Raised per candidate. Drivers exclude the candidate and keep going.
    """

    @classmethod
    def for_item(cls, item_name: str | None = None) -> "UnresolvedSelfTypeError":
        where = f" in '{item_name}'" if item_name else ""
        return cls(
            code=ErrorCode.UNRESOLVED_SELF_TYPE,
            message=f"No 'Self = <type>' where-predicate in scope{where}",
            details={"item": item_name},
        )


class ItemFormatError(SigSearchError):
    """A candidate declaration record does not have the expected shape."""

    @classmethod
    def malformed(cls, path: str, reason: str) -> "ItemFormatError":
        return cls(
            code=ErrorCode.ITEM_FORMAT_ERROR,
            message=f"Malformed item at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class QueryFormatError(SigSearchError):
    """A structured query does not have the expected shape."""

    @classmethod
    def malformed(cls, path: str, reason: str) -> "QueryFormatError":
        return cls(
            code=ErrorCode.QUERY_FORMAT_ERROR,
            message=f"Malformed query at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

