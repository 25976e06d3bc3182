"""Adaptive fallback placement for items that fit no free rectangle at full size."""

from __future__ import annotations

import logging

from scopebox.engine.config import LayoutConfig
from scopebox.engine.nodes import PackerItem, Placement
from scopebox.engine.packer import BinPacker
from scopebox.utils.geometry import Rect

logger = logging.getLogger(__name__)


def shrunk_size(free: Rect, item: PackerItem, config: LayoutConfig) -> tuple[float, float] | None:
    """Size the item would get in ``free``, or None if the result is unusable."""
    w = min(item.target_w, free.w * config.fallback_width_fraction)
    h = min(item.target_h, free.h)
    if w < config.min_box_size or h < config.min_box_size:
        return None
    if max(w / h, h / w) > config.fallback_max_aspect_ratio:
        return None
    return w, h


def place_with_fallback(
    packer: BinPacker, item: PackerItem, config: LayoutConfig
) -> Placement | None:
    """Place ``item`` shrunk into the most productive free rectangle.

    Candidates are scored by placed area times the fraction of the free
    rectangle it would use, so a large shrunk item in a snug rectangle beats
    a small one rattling around a big rectangle. Returns None when no
    rectangle yields a visible, readable box.
    """
    best: tuple[Rect, float, float] | None = None
    best_key: tuple[float, float, float] | None = None
    for free in packer.pool:
        size = shrunk_size(free, item, config)
        if size is None:
            continue
        w, h = size
        used = w * h
        key = (-used * (used / free.area), free.y, free.x)
        if best_key is None or key < best_key:
            best, best_key = (free, w, h), key

    if best is None:
        return None

    free, w, h = best
    logger.debug(
        "Fallback placed %s at %.1fx%.1f (target %.1fx%.1f)",
        item.id,
        w,
        h,
        item.target_w,
        item.target_h,
    )
    return packer.commit(free, item, w, h, via_fallback=True)
