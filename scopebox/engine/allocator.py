"""Value-proportional allocation for child containers, plus container chrome.

Child containers are the least flexible items in a packing pass, so their
sizes are fixed ("pinned") from their share of the parent's value before any
leaf is considered.
"""

from __future__ import annotations

import math

from scopebox.engine.config import LayoutConfig
from scopebox.engine.nodes import InputNode, PackerItem
from scopebox.utils.geometry import Rect


def header_height_for(depth: int, available_h: float, config: LayoutConfig) -> float:
    """Header band height: shrinks slightly with depth, never more than a fraction of the box."""
    depth_factor = max(config.header_min_depth_factor, 1.0 - depth * config.header_depth_decay)
    base = max(
        config.header_height * depth_factor,
        min(config.min_header_height, config.header_height),
    )
    return max(0.0, min(base, available_h * config.header_max_fraction))


def content_rect_for(rect: Rect, depth: int, config: LayoutConfig) -> tuple[float, Rect]:
    """(header height, content area) of a container occupying ``rect``."""
    header = header_height_for(depth, rect.h, config)
    pad = config.padding
    content = Rect(
        rect.x + pad,
        rect.y + header + pad,
        max(0.0, rect.w - 2 * pad),
        max(0.0, rect.h - header - 2 * pad),
    )
    return header, content


def container_budget(
    content_w: float,
    content_h: float,
    container_value: float,
    leaf_value: float,
    leaf_area: float,
    config: LayoutConfig,
) -> float:
    """Area of the content box that child containers may share.

    Without loose leaves the containers get everything. Otherwise they get the
    larger of their value share and whatever the leaves' estimated area leaves
    over; leaves are sized by preference, not by value.
    """
    area = content_w * content_h
    if leaf_area <= 0 or leaf_value <= 0:
        return area
    value_share = area * container_value / (container_value + leaf_value)
    leftover = area - leaf_area
    return min(area, max(value_share, leftover))


def leaf_band_height(
    content_w: float,
    content_h: float,
    budget: float,
    leaf_h: float,
    config: LayoutConfig,
) -> float:
    """Height kept free below the pinned containers for the loose leaves.

    At least one row of estimated leaves, or the part of the content area the
    container budget does not claim, whichever is taller. When the rest would
    be too short for any container, the band is dropped and both share the
    whole area.
    """
    area = content_w * content_h
    if area <= 0:
        return 0.0
    band = min(content_h, max(leaf_h, content_h * (1.0 - budget / area)))
    if content_h - band < config.min_box_size:
        return 0.0
    return band


def square_biased_size(area: float, max_w: float, max_h: float) -> tuple[float, float]:
    """w×h close to a square of the given area, capped by max_w / max_h."""
    if area <= 0 or max_w <= 0 or max_h <= 0:
        return 0.0, 0.0
    side = math.sqrt(area)
    w = h = side
    if w > max_w:
        w = max_w
        h = area / max_w
    if h > max_h:
        h = max_h
        w = min(area / max_h, max_w)
    return w, h


def allocate_containers(
    containers: list[tuple[int, InputNode]],
    content_w: float,
    content_h: float,
    budget: float,
    config: LayoutConfig,
) -> list[PackerItem]:
    """Pinned target sizes for child containers, in the order given.

    ``containers`` pairs each child with its index among the parent's children.
    """
    total = sum(child.weight for _, child in containers)
    if total <= 0:
        return []

    items = []
    for index, child in containers:
        target_area = child.weight / total * budget
        w, h = square_biased_size(target_area, content_w, content_h)
        w = min(max(w, config.min_box_size), content_w)
        h = min(max(h, config.min_box_size), content_h)
        items.append(
            PackerItem(
                id=child.id,
                target_w=w,
                target_h=h,
                value=child.weight,
                is_container=True,
                index=index,
            )
        )
    return items
