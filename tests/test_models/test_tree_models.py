"""Tests for the wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from scopebox.engine.config import LayoutConfigError
from scopebox.engine.heuristics import PackingHeuristic
from scopebox.models.requests import LayoutRequest
from scopebox.models.tree import LayoutOptions, ScopeNode
from tests.conftest import SAMPLE_TREE_DICT


def test_scope_node_to_input_node():
    node = ScopeNode.model_validate(SAMPLE_TREE_DICT).to_input_node()
    assert node.id == "file"
    assert len(node.children) == 6
    main = node.children[3]
    assert main.loc.start.line == 40
    assert [c.id for c in main.children] == ["main.args", "main.loop"]


def test_options_accept_both_spellings():
    camel = LayoutOptions.model_validate({"prefWidth": 120, "maxDepth": 2})
    snake = LayoutOptions.model_validate({"pref_width": 120, "max_depth": 2})
    assert camel == snake
    config = camel.to_config()
    assert config.pref_width == 120
    assert config.max_depth == 2


def test_options_default_heuristic():
    config = LayoutOptions().to_config(default_heuristic="best_area_fit")
    assert config.packing_heuristic is PackingHeuristic.BEST_AREA_FIT
    explicit = LayoutOptions(packingHeuristic="BestLongSideFit")
    assert explicit.to_config("best_area_fit").packing_heuristic is PackingHeuristic.BEST_LONG_SIDE_FIT


def test_options_reject_unknown_keys():
    with pytest.raises(ValidationError):
        LayoutOptions.model_validate({"colour": "red"})


def test_inconsistent_options_raise_config_error():
    with pytest.raises(LayoutConfigError):
        LayoutOptions(leafMinWidth=200).to_config()


def test_request_validate_alias():
    req = LayoutRequest.model_validate(
        {"tree": {"id": "r"}, "width": 10, "height": 10, "validate": True}
    )
    assert req.validate_result
    assert not req.include_events
