"""Subprocess runner for inspection commands.

Every tool call runs ``python -m appinspector <category> <command> [arg]``
in a fresh process rooted at the application, so each call sees the
application's current code and no state leaks between calls.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
import time
from pathlib import Path
from typing import Any

import structlog

from appinspector.config.constants import ENV_APP_PATH
from appinspector.core.logging import clear_request_id, set_request_id

log = structlog.get_logger(__name__)

# Characters of stderr kept in error results
_STDERR_TAIL = 2000


def parse_result(stdout: bytes, stderr: bytes, returncode: int | None) -> dict[str, Any]:
    """Decode the JSON document a command printed.

    The document is used even when the process exited non-zero (fatal
    bootstrap errors are reported that way).
    """
    text = stdout.decode("utf-8", errors="replace").strip()
    if text:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return data

    detail = stderr.decode("utf-8", errors="replace").strip()[-_STDERR_TAIL:]
    message = f"Inspector exited with status {returncode}"
    if detail:
        message = f"{message}: {detail}"
    return {"error": message}


def _summarize(result: dict[str, Any]) -> dict[str, Any]:
    summary: dict[str, Any] = {}
    if "total" in result:
        summary["total"] = result["total"]
    if "error" in result:
        summary["error"] = result["error"]
    return summary


class InspectorRunner:
    """Runs one inspection command per subprocess."""

    def __init__(self, app_root: Path, python_executable: str | None = None) -> None:
        self.app_root = app_root
        self.python_executable = python_executable or sys.executable

    def build_command(self, category: str, command: str, argument: str | None = None) -> list[str]:
        args = [self.python_executable, "-m", "appinspector", category, "--", command]
        if argument is not None:
            args.append(argument)
        return args

    def build_env(self) -> dict[str, str]:
        return {**os.environ, ENV_APP_PATH: str(self.app_root)}

    async def run(
        self,
        tool: str,
        category: str,
        command: str,
        argument: str | None = None,
    ) -> dict[str, Any]:
        """Run one command and return its parsed result."""
        set_request_id()
        start_time = time.perf_counter()
        log.info("tool_start", tool=tool, argument=argument)

        try:
            proc = await asyncio.create_subprocess_exec(
                *self.build_command(category, command, argument),
                cwd=str(self.app_root),
                env=self.build_env(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
            result = parse_result(stdout, stderr, proc.returncode)
        except OSError as e:
            log.error("tool_spawn_failed", tool=tool, error=str(e))
            result = {"error": f"Failed to start inspector: {e}"}

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        log.info("tool_complete", tool=tool, elapsed_ms=elapsed_ms, **_summarize(result))
        clear_request_id()
        return result
