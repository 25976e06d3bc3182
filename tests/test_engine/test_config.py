"""Tests for LayoutConfig construction and validation."""

from __future__ import annotations

import pytest

from scopebox.engine.config import LayoutConfig, LayoutConfigError
from scopebox.engine.heuristics import PackingHeuristic


def test_defaults():
    cfg = LayoutConfig()
    assert cfg.min_box_size == 12
    assert (cfg.min_text_width, cfg.min_text_height) == (40, 20)
    assert (cfg.pref_width, cfg.pref_height) == (80, 40)
    assert (cfg.min_aspect_ratio, cfg.max_aspect_ratio) == (1.0, 4.0)
    assert cfg.header_height == 25
    assert cfg.padding == 5
    assert cfg.grid_threshold_child_count == 6
    assert (cfg.utilization_low_threshold, cfg.utilization_critical_threshold) == (0.8, 0.6)
    assert cfg.packing_heuristic is PackingHeuristic.BEST_SHORT_SIDE_FIT
    assert (cfg.min_usable_residual_width, cfg.min_usable_residual_height) == (20, 12)
    assert cfg.max_depth is None


def test_from_options_accepts_camel_case():
    cfg = LayoutConfig.from_options(
        {"minBoxSize": 16, "packingHeuristic": "BestAreaFit", "maxDepth": 2}
    )
    assert cfg.min_box_size == 16
    assert cfg.packing_heuristic is PackingHeuristic.BEST_AREA_FIT
    assert cfg.max_depth == 2


def test_from_options_overrides_and_none():
    cfg = LayoutConfig.from_options({"padding": None, "pref_width": 120}, pref_height=60)
    assert cfg.padding == 5
    assert (cfg.pref_width, cfg.pref_height) == (120, 60)


def test_unknown_option_rejected():
    with pytest.raises(LayoutConfigError, match="bogusOption"):
        LayoutConfig.from_options({"bogusOption": 1})


def test_heuristic_string_coerced():
    cfg = LayoutConfig(packing_heuristic="best_long_side_fit")
    assert cfg.packing_heuristic is PackingHeuristic.BEST_LONG_SIDE_FIT


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_box_size": 0},
        {"pref_width": -1},
        {"padding": -2},
        {"leaf_min_width": 100},
        {"min_aspect_ratio": 5, "max_aspect_ratio": 4},
        {"utilization_critical_threshold": 0.9},
        {"fallback_width_fraction": 1.5},
        {"grid_max_rows": 0},
        {"max_depth": -1},
        {"packing_heuristic": "nope"},
        {"min_text_width": float("nan")},
    ],
)
def test_inconsistent_config_rejected(kwargs):
    with pytest.raises(LayoutConfigError):
        LayoutConfig(**kwargs)


def test_options_round_trip():
    cfg = LayoutConfig(min_box_size=14, max_depth=3, packing_heuristic="best_area_fit")
    assert LayoutConfig.from_options(cfg.to_options()) == cfg


def test_config_is_a_value_error():
    assert issubclass(LayoutConfigError, ValueError)
