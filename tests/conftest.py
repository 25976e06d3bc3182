"""Shared test fixtures."""

from __future__ import annotations

import pytest

from scopebox.engine.config import LayoutConfig
from scopebox.engine.diagnostics import DiagnosticsRecorder
from scopebox.engine.nodes import InputNode


def leaf(node_id: str, value: float = 10.0, category: str = "Variable") -> InputNode:
    return InputNode(id=node_id, category=category, value=value, label=node_id)


def container(
    node_id: str, *children: InputNode, value: float | None = None, category: str = "Class"
) -> InputNode:
    if value is None:
        value = sum(c.weight for c in children) or 1.0
    return InputNode(
        id=node_id, category=category, value=value, children=tuple(children), label=node_id
    )


# A small but realistic file: one class, a function with a nested block, loose statements
SAMPLE_TREE_DICT = {
    "id": "file",
    "category": "File",
    "label": "parser.py",
    "value": 320,
    "children": [
        {"id": "import-os", "category": "Import", "value": 4, "label": "import os"},
        {"id": "import-re", "category": "Import", "value": 4, "label": "import re"},
        {
            "id": "Parser",
            "category": "Class",
            "value": 180,
            "label": "class Parser",
            "children": [
                {"id": "Parser.__init__", "category": "Method", "value": 30},
                {"id": "Parser.parse", "category": "Method", "value": 90},
                {"id": "Parser.reset", "category": "Method", "value": 12},
                {"id": "Parser.peek", "category": "Method", "value": 8},
            ],
        },
        {
            "id": "main",
            "category": "Function",
            "value": 80,
            "label": "def main",
            "loc": {"start": {"line": 40, "column": 0}, "end": {"line": 60, "column": 12}},
            "children": [
                {"id": "main.args", "category": "Variable", "value": 6},
                {
                    "id": "main.loop",
                    "category": "ForLoop",
                    "value": 50,
                    "children": [
                        {"id": "main.loop.call", "category": "Call", "value": 20},
                        {"id": "main.loop.if", "category": "If", "value": 25},
                    ],
                },
            ],
        },
        {"id": "CONSTANT", "category": "Variable", "value": 6, "label": "CONSTANT = 3"},
        {"id": "empty-block", "category": "Block", "value": 0},
    ],
}

VIEWPORTS = [(1200, 800), (800, 600), (400, 300), (200, 150), (120, 90), (60, 40)]


@pytest.fixture
def config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def recorder() -> DiagnosticsRecorder:
    return DiagnosticsRecorder()


@pytest.fixture
def sample_tree() -> InputNode:
    return InputNode.from_dict(SAMPLE_TREE_DICT)
