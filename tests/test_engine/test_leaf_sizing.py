"""Tests for leaf sizing and render modes."""

from __future__ import annotations

import pytest

from scopebox.engine.leaf_sizing import (
    clamp_aspect,
    estimated_leaf_size,
    render_mode_for,
    size_leaf,
)
from scopebox.engine.nodes import RenderMode


def test_preferred_size_kept(config):
    assert size_leaf(80, 40, config) == (80, 40)


def test_smaller_allocation_taken_as_is(config):
    assert size_leaf(50, 30, config) == (50, 30)


def test_wide_allocation_clamped(config):
    assert size_leaf(400, 50, config) == pytest.approx((200, 50))


def test_tall_allocation_clamped(config):
    assert size_leaf(100, 300, config) == pytest.approx((100, 100))


def test_floors_bounded_by_allocation(config):
    assert size_leaf(10, 10, config) == (10, 10)
    assert size_leaf(-5, 10, config) == (0, 10)


@pytest.mark.parametrize(
    "w, h",
    [(80, 40), (400, 50), (100, 300), (147.5, 82.5), (13, 700), (999, 12), (25, 25)],
)
def test_sizing_is_idempotent(config, w, h):
    once = size_leaf(w, h, config)
    assert size_leaf(*once, config) == pytest.approx(once)


def test_clamp_aspect():
    assert clamp_aspect(100, 10, 1, 4) == (40, 10)
    assert clamp_aspect(10, 100, 1, 4) == (10, 10)
    assert clamp_aspect(30, 20, 1, 4) == (30, 20)


@pytest.mark.parametrize(
    "w, h, mode",
    [
        (11, 50, RenderMode.NONE),
        (50, 11.9, RenderMode.NONE),
        (12, 12, RenderMode.BOX),
        (39, 30, RenderMode.BOX),
        (40, 20, RenderMode.TEXT),
        (200, 90, RenderMode.TEXT),
    ],
)
def test_render_mode(config, w, h, mode):
    assert render_mode_for(w, h, config) is mode


def test_estimated_size_capped_by_content(config):
    assert estimated_leaf_size(390, 265, config) == (80, 40)
    assert estimated_leaf_size(50, 30, config) == (50, 30)
