"""Import objects by dotted or ``module:attr`` reference."""

from __future__ import annotations

import importlib
from typing import Any


def import_object(reference: str) -> Any:
    """Import the object a reference names.

    Accepts ``package.module:attr.sub`` (explicit split) or
    ``package.module.Attr`` (the longest importable module prefix wins).

    Raises:
        ImportError: No prefix of the reference is an importable module.
        AttributeError: The module exists but lacks the attribute.
    """
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
        obj: Any = importlib.import_module(module_name)
        for attr in attr_path.split(".") if attr_path else []:
            obj = getattr(obj, attr)
        return obj

    parts = reference.split(".")
    for split in range(len(parts), 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # Only swallow "this prefix is not a module"; errors raised
            # inside an existing module propagate.
            if e.name is None or not module_name.startswith(e.name):
                raise
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr)
        return obj

    raise ImportError(f"No module found for '{reference}'")
