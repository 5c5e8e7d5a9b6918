"""AppInspector error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Bootstrap
- 4xxx: Lookup (catalog and type resolution)
- 5xxx: Arguments
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

    # Bootstrap (3xxx)
    APP_NOT_FOUND = 3001
    BOOTSTRAP_FAILED = 3002

    # Lookup (4xxx)
    CATALOG_DIR_MISSING = 4001
    TYPE_NOT_FOUND = 4002

    # Arguments (5xxx)
    ARGUMENT_REQUIRED = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class AppInspectorError(Exception):
    """Base error with structured context for command results."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TYPE_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(AppInspectorError):
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


class BootstrapError(AppInspectorError):
    """The target application cannot be located or initialized.

    Fatal: reported once and aborts the process before any operation runs.
    """

    @classmethod
    def app_not_found(cls, root: str) -> "BootstrapError":
        return cls(
            code=ErrorCode.APP_NOT_FOUND,
            message=f"Application not found at: {root}",
            details={"root": root},
        )

    @classmethod
    def failed(cls, target: str, reason: str) -> "BootstrapError":
        return cls(
            code=ErrorCode.BOOTSTRAP_FAILED,
            message=f"Failed to bootstrap '{target}': {reason}",
            details={"target": target, "reason": reason},
        )


class CatalogError(AppInspectorError):
    """A catalog root directory is missing."""

    @classmethod
    def missing_directory(cls, label: str, path: str) -> "CatalogError":
        return cls(
            code=ErrorCode.CATALOG_DIR_MISSING,
            message=f"No {label} directory found",
            details={"path": path},
        )


class TypeNotFoundError(AppInspectorError):
    """A requested model or enum name does not resolve to a loadable type."""

    @classmethod
    def for_name(cls, label: str, name: str) -> "TypeNotFoundError":
        return cls(
            code=ErrorCode.TYPE_NOT_FOUND,
            message=f"{label} '{name}' not found",
            details={"name": name},
        )


class ArgumentError(AppInspectorError):
    """A required command argument is missing."""

    @classmethod
    def required(cls, message: str) -> "ArgumentError":
        return cls(code=ErrorCode.ARGUMENT_REQUIRED, message=message)


class InternalError(AppInspectorError):
    """An unexpected exception raised while a command ran."""

    @classmethod
    def from_exception(cls, exc: BaseException, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(exc) or type(exc).__name__,
            details={"exception": type(exc).__name__, **details},
        )
