"""Configuration constants.

Values here are protocol and implementation constants, not user settings.
For configurable values, see models.py.
"""

# =============================================================================
# Environment
# =============================================================================

ENV_APP_PATH = "APPINSPECTOR_APP_PATH"
"""Single environment value designating the target application's root."""

DEFAULT_RELATIVE_APP_ROOT = "../.."
"""Fallback app root, relative to the working directory (tool vendored inside the app)."""

# =============================================================================
# Catalog scanning
# =============================================================================

SOURCE_SUFFIX = ".py"
"""Extension of files that may define models and enums."""

ALWAYS_PRUNED_DIRS = frozenset({"__pycache__"})
"""Directories never descended into, in addition to hidden ones."""

# =============================================================================
# Record values
# =============================================================================

UNKNOWN_TYPE = "unknown"
"""Sentinel for column and key types that could not be introspected.

Covers both an unsupported (user-defined) column type and unreachable
column metadata; the two causes are not distinguished.
"""

TIMESTAMP_COLUMNS = ("created_at", "updated_at")
"""Attributes whose presence means a model keeps timestamps."""

FRAMEWORK_MODULE_PREFIXES = (
    "builtins",
    "abc",
    "enum",
    "typing",
    "sqlalchemy",
    "sqlmodel",
    "pydantic",
    "pydantic_core",
)
"""Modules whose classes never count as application mixins."""
