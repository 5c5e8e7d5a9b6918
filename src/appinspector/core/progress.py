"""Human-readable console output for the CLI.

Status lines go to stderr so stdout stays reserved for JSON results and the
MCP stdio stream. Catalog tables (``--table``) are the one human-readable
stdout format.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

_stderr = Console(stderr=True)
_stdout = Console()

_PREFIXES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "info": "  ",
}


def status(message: str, *, style: str = "info") -> None:
    """Print a status line to stderr."""
    _stderr.print(f"{_PREFIXES.get(style, '')}{message}", highlight=False)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``1 model``, ``3 models``, ``2 entries``."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def print_catalog_table(title: str, entries: list[dict[str, Any]]) -> None:
    """Render catalog entries as a table on stdout.

    Columns follow the keys of the first entry, so enum catalogs show their
    backing type and case count alongside the names.
    """
    columns = list(entries[0]) if entries else ["name", "qualified_name"]
    table = Table(title=title, title_justify="left", header_style="bold cyan")
    for column in columns:
        table.add_column(column.replace("_", " "))
    for entry in entries:
        table.add_row(*("" if entry.get(c) is None else str(entry[c]) for c in columns))
    _stdout.print(table)
    _stdout.print(pluralize(len(entries), title.rstrip("s").lower()), style="dim")
