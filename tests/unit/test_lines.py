from __future__ import annotations

import ast
from pathlib import Path

import pytest

import cfail.diagnostics as diagnostics_api
import cfail.expectations.parser as parser_module
from cfail.lines import split_lines

pytestmark = pytest.mark.unit


def test_split_lines_matches_line_terminator_semantics() -> None:
    assert split_lines("") == []
    assert split_lines("a") == ["a"]
    assert split_lines("a\n") == ["a"]
    assert split_lines("a\r\nb") == ["a", "b"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("\n") == [""]


def test_diagnostics_reexports_shared_split_lines() -> None:
    assert diagnostics_api.split_lines is split_lines


def test_expectation_parser_does_not_import_normalizer() -> None:
    tree = ast.parse(Path(parser_module.__file__).read_text(encoding="utf-8"))
    imported = {
        node.module
        for node in ast.walk(tree)
        if isinstance(node, ast.ImportFrom) and node.module is not None
    }

    assert "cfail.lines" in imported
    assert not any(module.startswith("cfail.diagnostics.normalize") for module in imported)
