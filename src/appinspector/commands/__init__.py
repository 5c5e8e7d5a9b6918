"""Command table and dispatch for the models and enums categories."""

from appinspector.commands.dispatcher import dispatch
from appinspector.commands.registry import CommandSpec, registry

__all__ = ["CommandSpec", "dispatch", "registry"]
