"""Tests for adaptive fallback placement."""

from __future__ import annotations

import pytest

from scopebox.engine.fallback import place_with_fallback, shrunk_size
from scopebox.engine.nodes import PackerItem
from scopebox.engine.packer import BinPacker
from scopebox.utils.geometry import Rect


def _item(w: float, h: float) -> PackerItem:
    return PackerItem(id="big", target_w=w, target_h=h, value=1.0)


def test_shrinks_to_fraction_of_width(config):
    packer = BinPacker(100, 100, config)
    item = _item(150, 50)
    assert packer.place(item) is None
    placement = place_with_fallback(packer, item, config)
    assert placement.via_fallback
    assert placement.rect.as_tuple() == pytest.approx((0, 0, 98, 50))
    assert packer.placements == [placement]


def test_rejects_extreme_aspect(config):
    packer = BinPacker(200, 15, config)
    assert place_with_fallback(packer, _item(300, 300), config) is None


def test_rejects_below_min_box(config):
    packer = BinPacker(100, 10, config)
    assert place_with_fallback(packer, _item(200, 200), config) is None


def test_prefers_more_productive_rect(config):
    packer = BinPacker(0, 0, config)
    packer.pool.insert(Rect(200, 0, 50, 50))
    packer.pool.insert(Rect(0, 0, 100, 100))
    placement = place_with_fallback(packer, _item(120, 120), config)
    assert placement.rect.as_tuple() == pytest.approx((0, 0, 98, 100))


def test_shrunk_size(config):
    assert shrunk_size(Rect(0, 0, 100, 30), _item(200, 20), config) == pytest.approx((98, 20))
    assert shrunk_size(Rect(0, 0, 11, 100), _item(200, 200), config) is None
