"""Tests for container allocation and container chrome."""

from __future__ import annotations

import pytest

from scopebox.engine.allocator import (
    allocate_containers,
    container_budget,
    content_rect_for,
    header_height_for,
    leaf_band_height,
    square_biased_size,
)
from scopebox.utils.geometry import Rect
from tests.conftest import container, leaf


def test_header_full_at_root(config):
    assert header_height_for(0, 300, config) == 25


def test_header_shrinks_with_depth(config):
    assert header_height_for(2, 300, config) == pytest.approx(25 * 0.94)
    # Bottoms out at 85%
    assert header_height_for(10, 300, config) == pytest.approx(25 * 0.85)


def test_header_capped_by_container_height(config):
    assert header_height_for(0, 30, config) == pytest.approx(12)


def test_content_rect(config):
    header, content = content_rect_for(Rect(0, 0, 400, 300), 0, config)
    assert header == 25
    assert content == Rect(5, 30, 390, 265)


def test_content_rect_never_negative(config):
    _, content = content_rect_for(Rect(0, 0, 8, 8), 0, config)
    assert content.w == 0
    assert content.h == 0


def test_budget_without_leaves(config):
    assert container_budget(100, 100, 5, 0, 0, config) == 10000


def test_budget_leaves_room_for_leaf_estimate(config):
    # Value share is 5000, but the leaves only need 2000
    assert container_budget(100, 100, 1, 1, 2000, config) == 8000


def test_budget_follows_value_share_when_larger(config):
    assert container_budget(100, 100, 9, 1, 5000, config) == pytest.approx(9000)


def test_leaf_band_at_least_one_row(config):
    band = leaf_band_height(790, 565, 439950, 40, config)
    assert band == 40


def test_leaf_band_dropped_when_no_room_for_containers(config):
    assert leaf_band_height(100, 45, 2000, 40, config) == 0


def test_square_biased_size():
    assert square_biased_size(400, 100, 100) == pytest.approx((20, 20))
    assert square_biased_size(10000, 200, 50) == pytest.approx((200, 50))
    assert square_biased_size(0, 100, 100) == (0, 0)


def test_allocation_proportional_to_value(config):
    children = [
        (0, container("a", leaf("a1"), value=3)),
        (1, container("b", leaf("b1"), value=1)),
    ]
    items = allocate_containers(children, 400, 400, 160000, config)
    assert [i.id for i in items] == ["a", "b"]
    assert all(i.is_container for i in items)
    assert items[0].target_area == pytest.approx(120000)
    assert items[1].target_area == pytest.approx(40000)
    assert items[1].target_w == pytest.approx(200)
    assert items[0].index == 0 and items[1].index == 1


def test_allocation_floors_at_min_box(config):
    children = [
        (0, container("big", leaf("x"), value=10000)),
        (1, container("tiny", leaf("y"), value=1)),
    ]
    items = allocate_containers(children, 300, 300, 90000, config)
    assert items[1].target_w >= config.min_box_size
    assert items[1].target_h >= config.min_box_size


def test_allocation_capped_by_content(config):
    items = allocate_containers([(0, container("c", leaf("x")))], 300, 100, 30000, config)
    assert items[0].target_w <= 300
    assert items[0].target_h <= 100
