"""Leaf sizing and render-mode classification.

A leaf takes the space it is given, but once that space is larger than its
preferred size the aspect ratio is clamped: a legible label matters more than
filling the allocation.
"""

from __future__ import annotations

from scopebox.engine.config import LayoutConfig
from scopebox.engine.nodes import RenderMode


def size_leaf(avail_w: float, avail_h: float, config: LayoutConfig) -> tuple[float, float]:
    """Final (w, h) of a leaf allocated ``avail_w × avail_h``; never larger than that."""
    avail_w = max(0.0, avail_w)
    avail_h = max(0.0, avail_h)
    w, h = avail_w, avail_h

    if w > config.pref_width or h > config.pref_height:
        w, h = clamp_aspect(w, h, config.min_aspect_ratio, config.max_aspect_ratio)

    # Hard floors, bounded by what was actually allocated
    w = max(w, min(config.leaf_min_width, avail_w))
    h = max(h, min(config.leaf_min_height, avail_h))
    return w, h


def clamp_aspect(w: float, h: float, min_ratio: float, max_ratio: float) -> tuple[float, float]:
    """Shrink the excess dimension until min_ratio <= w/h <= max_ratio."""
    if w <= 0 or h <= 0:
        return w, h
    if w / h > max_ratio:
        w = h * max_ratio
    elif w / h < min_ratio:
        h = w / min_ratio
    return w, h


def render_mode_for(w: float, h: float, config: LayoutConfig) -> RenderMode:
    if w < config.min_box_size or h < config.min_box_size:
        return RenderMode.NONE
    if w >= config.min_text_width and h >= config.min_text_height:
        return RenderMode.TEXT
    return RenderMode.BOX


def estimated_leaf_size(
    content_w: float, content_h: float, config: LayoutConfig
) -> tuple[float, float]:
    """Packing target for a loose leaf before any grid or utilization adjustment."""
    return min(config.pref_width, content_w), min(config.pref_height, content_h)
