"""Config module exports."""

from appinspector.config.loader import AppInspectorSettings, load_config
from appinspector.config.models import (
    AppInspectorConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
    TargetConfig,
)

__all__ = [
    "load_config",
    "AppInspectorConfig",
    "AppInspectorSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
    "TargetConfig",
]
