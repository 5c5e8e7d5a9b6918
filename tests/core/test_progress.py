"""Tests for core/progress.py module.

Covers:
- pluralize() function
- status() function
- print_catalog_table() function
"""

from __future__ import annotations

import pytest

from appinspector.core.progress import pluralize, print_catalog_table, status


class TestPluralize:
    """Tests for pluralize function."""

    @pytest.mark.parametrize(
        ("count", "singular", "plural", "expected"),
        [
            (0, "model", None, "0 models"),
            (1, "model", None, "1 model"),
            (2, "enum", None, "2 enums"),
            (1, "entry", "entries", "1 entry"),
            (3, "entry", "entries", "3 entries"),
        ],
    )
    def test_pluralize(self, count: int, singular: str, plural: str | None, expected: str) -> None:
        """Count and word agree in number."""
        assert pluralize(count, singular, plural) == expected


class TestStatus:
    """Tests for status function."""

    def test_status_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Status lines never touch stdout."""
        status("Serving", style="success")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Serving" in captured.err

    def test_unknown_style_has_no_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Unrecognized styles print the bare message."""
        status("plain", style="sparkly")

        assert capsys.readouterr().err.strip() == "plain"


class TestPrintCatalogTable:
    """Tests for print_catalog_table function."""

    def test_renders_entries_and_count(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Rows, headers and a pluralized footer are printed."""
        entries = [
            {"name": "priority/Priority", "qualified_name": "a.Priority",
             "backing_type": "int", "case_count": 3},
            {"name": "visibility/Visibility", "qualified_name": "a.Visibility",
             "backing_type": None, "case_count": 2},
        ]

        print_catalog_table("Enums", entries)

        out = capsys.readouterr().out
        assert "priority/Priority" in out
        assert "backing type" in out
        assert "2 enums" in out

    def test_empty_catalog(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty catalog still prints headers and a zero count."""
        print_catalog_table("Models", [])

        out = capsys.readouterr().out
        assert "qualified name" in out
        assert "0 models" in out
