"""Command dispatch and the operation error boundary.

One dispatch validates the command and its argument, bootstraps the
application, runs one command and returns one JSON-ready dict. Errors
raised by a command become ``{"error": ..., <subject>: name}`` results;
bootstrap failures propagate so the caller can abort.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog

# Import command modules to trigger registration
from appinspector.commands import enums, models  # noqa: F401
from appinspector.commands.registry import CommandSpec, registry
from appinspector.core.errors import (
    AppInspectorError,
    ArgumentError,
    ErrorCode,
    InternalError,
)
from appinspector.runtime.bootstrap import Runtime

log = structlog.get_logger(__name__)

BootstrapFn = Callable[[], Runtime]


def error_result(
    spec: CommandSpec, argument: str | None, error: AppInspectorError
) -> dict[str, Any]:
    """Result of a failed command; lookups echo the requested subject back."""
    result: dict[str, Any] = {"error": error.message}
    if spec.subject_key is not None and error.code is not ErrorCode.ARGUMENT_REQUIRED:
        result[spec.subject_key] = argument
    return result


def dispatch(
    category: str,
    command: str | None,
    argument: str | None,
    bootstrap_runtime: BootstrapFn,
) -> dict[str, Any]:
    """Run one command of ``category`` against a freshly bootstrapped app.

    Unknown commands return the category's help payload and missing
    arguments an error result, both without bootstrapping.

    Raises:
        BootstrapError: The application cannot be initialized.
        ConfigError: The configuration is invalid.
    """
    spec = registry.get(category, command or "")
    if spec is None:
        return registry.help_payload(category)
    if spec.is_missing(argument):
        rejection = ArgumentError.required(spec.missing_argument)
        log.debug("command_rejected", command=spec.name, **rejection.to_dict())
        return error_result(spec, argument, rejection)

    runtime = bootstrap_runtime()

    start_time = time.perf_counter()
    log.debug("command_start", category=category, command=spec.name, argument=argument)
    try:
        result = spec.handler(runtime, argument)
    except AppInspectorError as e:
        log.debug("command_error", command=spec.name, **e.to_dict())
        return error_result(spec, argument, e)
    except Exception as e:
        failure = InternalError.from_exception(e, command=spec.name)
        log.debug("command_failed", exc_info=True, **failure.to_dict())
        return error_result(spec, argument, failure)

    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    log.debug("command_complete", command=spec.name, elapsed_ms=elapsed_ms)
    return result
