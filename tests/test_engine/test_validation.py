"""Tests for layout validation."""

from __future__ import annotations

from scopebox.engine.nodes import LayoutNode, RenderMode
from scopebox.engine.orchestrator import compute_layout
from scopebox.engine.validation import validate_layout
from scopebox.utils.geometry import Rect
from tests.conftest import container, leaf

A = leaf("a")
B = leaf("b")
PARENT = container("p", A, B)
CONTENT = Rect(5, 30, 190, 165)


def _parent(*children: LayoutNode, hidden: int = 0) -> LayoutNode:
    return LayoutNode(
        PARENT,
        0,
        0,
        200,
        200,
        RenderMode.TEXT,
        is_container=True,
        children=children,
        hidden_children_count=hidden,
        content_rect=CONTENT,
    )


def _child(node, x, y, w=50, h=30, mode=RenderMode.TEXT) -> LayoutNode:
    return LayoutNode(node, x, y, w, h, mode, depth=1)


def test_sound_layout_has_no_issues(config):
    layout = _parent(_child(A, 5, 30), _child(B, 55, 30))
    assert validate_layout(layout, config) == []


def test_engine_output_is_sound(sample_tree, config):
    result = compute_layout(sample_tree, 640, 480, config)
    assert validate_layout(result, config, viewport=(640, 480)) == []


def test_overlap_reported(config):
    layout = _parent(_child(A, 5, 30), _child(B, 40, 40))
    issues = validate_layout(layout, config)
    assert len(issues) == 1
    assert "overlap" in issues[0]


def test_touching_edges_allowed(config):
    layout = _parent(_child(A, 5, 30), _child(B, 5, 60))
    assert validate_layout(layout, config) == []


def test_escape_from_content_reported(config):
    layout = _parent(_child(A, 5, 10), _child(B, 100, 30))
    issues = validate_layout(layout, config)
    assert any("escapes" in i and i.startswith("a") for i in issues)


def test_conservation_reported(config):
    layout = _parent(_child(A, 5, 30))
    issues = validate_layout(layout, config)
    assert any("viable children" in i for i in issues)
    assert validate_layout(_parent(_child(A, 5, 30), hidden=1), config) == []


def test_text_mode_too_small_reported(config):
    layout = _parent(_child(A, 5, 30, w=30, h=15), _child(B, 100, 30))
    issues = validate_layout(layout, config)
    assert any("text mode" in i for i in issues)


def test_unreadable_aspect_reported(config):
    layout = _parent(_child(A, 5, 30, w=180, h=30), _child(B, 5, 100))
    issues = validate_layout(layout, config)
    assert any("aspect ratio" in i for i in issues)


def test_viewport_overflow_reported(config):
    layout = _parent(_child(A, 5, 30), _child(B, 55, 30))
    issues = validate_layout(layout, config, viewport=(150, 150))
    assert any("viewport" in i for i in issues)
