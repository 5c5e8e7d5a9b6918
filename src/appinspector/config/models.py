"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (APPINSPECTOR__SECTION__KEY)
3. App YAML (<app root>/.appinspector/config.yaml)
4. Global YAML (~/.config/appinspector/config.yaml)
5. Built-in defaults (this file)

Examples:
    APPINSPECTOR__LOGGING__LEVEL=DEBUG
    APPINSPECTOR__TARGET__MODELS_PACKAGE=shop.models
    APPINSPECTOR__TARGET__DATABASE_URL=postgresql+psycopg://localhost/shop
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v == "stderr":
            return v
        if v == "stdout":
            raise ValueError("stdout is reserved for command results")
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        APPINSPECTOR__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Commands stay quiet on stderr unless raised.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TargetConfig(BaseModel):
    """Where the inspected application keeps its models, enums and database.

    Env vars:
        APPINSPECTOR__TARGET__BOOTSTRAP_MODULE: Module imported to initialize the app
        APPINSPECTOR__TARGET__MODELS_PACKAGE: Package holding the ORM models
        APPINSPECTOR__TARGET__ENUMS_PACKAGE: Package holding the enums
        APPINSPECTOR__TARGET__BASE_CLASS: Required model base ("module:attr")
        APPINSPECTOR__TARGET__DATABASE_URL: SQLAlchemy URL for column introspection
        APPINSPECTOR__TARGET__ENGINE: Engine reference ("module:attr", may be a factory)
    """

    bootstrap_module: str = Field(
        default="app",
        description="Dotted module imported before any introspection. "
        "Must exist under the app root.",
    )
    models_package: str = Field(
        default="app.models",
        description="Dotted package scanned for ORM models.",
    )
    enums_package: str = Field(
        default="app.enums",
        description="Dotted package scanned for enums.",
    )
    models_exclude_dirs: list[str] = Field(
        default_factory=lambda: ["mixins", "concerns", "scopes", "overrides"],
        description="Subdirectories of the models package skipped while scanning.",
    )
    enums_exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Subdirectories of the enums package skipped while scanning.",
    )
    base_class: str | None = Field(
        default=None,
        description="Models must subclass this ('module:attr'). Default: any mapped class.",
    )
    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy database URL. Takes precedence over 'engine'.",
    )
    engine: str | None = Field(
        default=None,
        description="Reference to the app's Engine or a zero-argument factory ('module:attr'). "
        "Default: an 'engine' attribute on the bootstrap module, if any.",
    )

    @field_validator("bootstrap_module", "models_package", "enums_package")
    @classmethod
    def validate_dotted(cls, v: str) -> str:
        if not v or any(not part.isidentifier() for part in v.split(".")):
            raise ValueError(f"Not a dotted module path: {v!r}")
        return v


class ServerConfig(BaseModel):
    """MCP front end configuration.

    Env vars:
        APPINSPECTOR__SERVER__NAME: Server name advertised to MCP clients
        APPINSPECTOR__SERVER__PYTHON_EXECUTABLE: Interpreter used for per-call subprocesses
    """

    name: str = Field(default="appinspector", description="Server name advertised to clients.")
    python_executable: str | None = Field(
        default=None,
        description="Interpreter that runs each introspection command. "
        "Default: the interpreter running the server.",
    )


class AppInspectorConfig(BaseModel):
    """Root configuration for AppInspector."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    target: TargetConfig = Field(default_factory=TargetConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
