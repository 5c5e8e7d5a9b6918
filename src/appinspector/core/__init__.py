"""Core module exports."""

from appinspector.core.errors import (
    AppInspectorError,
    ArgumentError,
    BootstrapError,
    CatalogError,
    ConfigError,
    ErrorCode,
    InternalError,
    TypeNotFoundError,
)
from appinspector.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)
from appinspector.core.progress import pluralize, status

__all__ = [
    # Errors
    "AppInspectorError",
    "ArgumentError",
    "BootstrapError",
    "CatalogError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "TypeNotFoundError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
    # Progress
    "pluralize",
    "status",
]
