"""Command registry for the models and enums categories.

Provides decorator-based command registration. Each command is a plain
function taking the bootstrapped runtime and the optional argument and
returning a JSON-ready dict.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from appinspector.runtime.bootstrap import Runtime

# Handler signature: (runtime, argument) -> dict
HandlerFn = Callable[["Runtime", Any], dict[str, Any]]


@dataclass
class CommandSpec:
    """Specification for a registered command."""

    category: str
    name: str
    handler: HandlerFn
    description: str
    argument: str | None = None
    missing_argument: str | None = None
    subject_key: str | None = None

    def is_missing(self, argument: str | None) -> bool:
        """Whether a required argument was not supplied.

        Commands naming a subject need a non-empty name; other commands
        accept an empty string.
        """
        if self.missing_argument is None:
            return False
        if self.subject_key is not None:
            return not argument
        return argument is None

    @property
    def usage(self) -> str:
        """Help key, e.g. ``schema <ModelName>``."""
        if self.argument is None:
            return self.name
        return f"{self.name} <{self.argument}>"


class CommandRegistry:
    """Registry for commands with decorator-based registration."""

    _instance: CommandRegistry | None = None
    _commands: dict[tuple[str, str], CommandSpec]

    def __new__(cls) -> CommandRegistry:
        """Singleton pattern for global registry."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._commands = {}
        return cls._instance

    def register(
        self,
        category: str,
        name: str,
        description: str,
        *,
        argument: str | None = None,
        missing_argument: str | None = None,
        subject_key: str | None = None,
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator to register a command handler.

        Usage:
            @registry.register("models", "schema", "Get schema for a specific model",
                               argument="ModelName", missing_argument="Model name required",
                               subject_key="model")
            def schema(runtime: Runtime, name: str) -> dict:
                ...
        """

        def decorator(fn: HandlerFn) -> HandlerFn:
            self._commands[(category, name)] = CommandSpec(
                category=category,
                name=name,
                handler=fn,
                description=description,
                argument=argument,
                missing_argument=missing_argument,
                subject_key=subject_key,
            )
            return fn

        return decorator

    def get(self, category: str, name: str) -> CommandSpec | None:
        """Get a specific command spec, None if unknown."""
        return self._commands.get((category, name))

    def get_all(self, category: str | None = None) -> list[CommandSpec]:
        """Get registered command specs in registration order."""
        return [
            spec
            for spec in self._commands.values()
            if category is None or spec.category == category
        ]

    def categories(self) -> list[str]:
        return list(dict.fromkeys(spec.category for spec in self._commands.values()))

    def help_payload(self, category: str) -> dict[str, Any]:
        """``{"commands": {usage: description}}`` for one category."""
        return {"commands": {spec.usage: spec.description for spec in self.get_all(category)}}


# Global registry instance
registry = CommandRegistry()
