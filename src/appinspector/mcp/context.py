"""Application context for MCP handlers.

Single object passed to all tool handlers with the application root, the
resolved configuration and the command runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from appinspector.config.models import AppInspectorConfig
    from appinspector.mcp.runner import InspectorRunner


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers."""

    app_root: Path
    config: AppInspectorConfig
    runner: InspectorRunner

    @classmethod
    def create(cls, app_root: Path, config: AppInspectorConfig) -> AppContext:
        """Factory to create context with the runner wired to the app root.

        Args:
            app_root: Application root directory
            config: Resolved configuration for that application
        """
        from appinspector.mcp.runner import InspectorRunner

        runner = InspectorRunner(app_root, python_executable=config.server.python_executable)
        return cls(app_root=app_root, config=config, runner=runner)
