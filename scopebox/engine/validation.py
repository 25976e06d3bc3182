"""Structural checks on a finished layout tree.

Used by the HTTP layer when a caller asks for validation and by the property
tests. Each check returns human-readable issue strings; an empty list means
the layout is sound.
"""

from __future__ import annotations

import logging
import math

from shapely import STRtree
from shapely.geometry import box

from scopebox.engine.config import LayoutConfig
from scopebox.engine.nodes import LayoutNode, RenderMode
from scopebox.utils.geometry import Rect, aspect_ratio

logger = logging.getLogger(__name__)

# Slack for float rounding, in px and px² respectively
POSITION_TOLERANCE = 1e-3
AREA_TOLERANCE = 1e-3


def validate_layout(
    layout: LayoutNode,
    config: LayoutConfig | None = None,
    viewport: tuple[float, float] | None = None,
) -> list[str]:
    """Run every check over the whole tree."""
    config = config or LayoutConfig()
    issues: list[str] = []
    if viewport is not None:
        frame = Rect(0.0, 0.0, viewport[0], viewport[1])
        if not frame.contains(layout.rect, POSITION_TOLERANCE):
            issues.append(f"{layout.id}: root exceeds the {viewport[0]}x{viewport[1]} viewport")

    for node in layout.walk():
        issues.extend(check_finite(node))
        issues.extend(check_containment(node))
        issues.extend(check_overlap(node))
        issues.extend(check_conservation(node))
        issues.extend(check_render_mode(node, config))
        issues.extend(check_aspect(node, config))

    if issues:
        logger.warning("Layout validation found %d issue(s)", len(issues))
    return issues


def check_finite(node: LayoutNode) -> list[str]:
    if all(math.isfinite(v) and v >= 0 for v in (node.w, node.h)) and all(
        math.isfinite(v) for v in (node.x, node.y)
    ):
        return []
    return [f"{node.id}: non-finite or negative geometry {node.rect.as_tuple()}"]


def check_containment(node: LayoutNode) -> list[str]:
    """Every child lies inside its parent's content area."""
    if not node.children or node.content_rect is None:
        return []
    content = box(*node.content_rect.bounds()).buffer(POSITION_TOLERANCE, join_style="mitre")
    return [
        f"{child.id}: escapes content area of {node.id}"
        for child in node.children
        if not content.covers(box(*child.rect.bounds()))
    ]


def check_overlap(node: LayoutNode) -> list[str]:
    """No two siblings share positive area."""
    if len(node.children) < 2:
        return []
    boxes = [box(*c.rect.bounds()) for c in node.children]
    tree = STRtree(boxes)
    issues = []
    for i, b in enumerate(boxes):
        for j in tree.query(b):
            if j <= i:
                continue
            shared = b.intersection(boxes[j]).area
            if shared > AREA_TOLERANCE:
                issues.append(
                    f"{node.children[i].id} and {node.children[j].id} overlap by {shared:.3f} px²"
                )
    return issues


def check_conservation(node: LayoutNode) -> list[str]:
    """Every viable child is either rendered or counted as hidden."""
    if not node.is_container:
        return []
    expected = len(node.node.viable_children)
    actual = len(node.children) + node.hidden_children_count
    if actual != expected:
        return [
            f"{node.id}: {len(node.children)} placed + {node.hidden_children_count} hidden "
            f"!= {expected} viable children"
        ]
    return []


def check_render_mode(node: LayoutNode, config: LayoutConfig) -> list[str]:
    issues = []
    for child in node.children:
        if child.render_mode is RenderMode.NONE:
            issues.append(f"{child.id}: render mode none inside the output tree")
    if node.render_mode is RenderMode.TEXT and (
        node.w < config.min_text_width or node.h < config.min_text_height
    ):
        issues.append(f"{node.id}: text mode at {node.w:.1f}x{node.h:.1f}")
    return issues


def check_aspect(node: LayoutNode, config: LayoutConfig) -> list[str]:
    """Leaves larger than the preferred size keep a readable aspect ratio."""
    if node.is_container or node.render_mode is RenderMode.NONE or node.h <= 0:
        return []
    if node.w <= config.pref_width and node.h <= config.pref_height:
        return []
    ratio = aspect_ratio(node.w, node.h)
    lo = config.min_aspect_ratio - POSITION_TOLERANCE
    hi = config.max_aspect_ratio + POSITION_TOLERANCE
    if lo <= ratio <= hi:
        return []
    # Floors may push a tiny allocation outside the band; that is allowed
    if node.w <= config.leaf_min_width or node.h <= config.leaf_min_height:
        return []
    return [f"{node.id}: aspect ratio {ratio:.2f} outside [{lo:.2f}, {hi:.2f}]"]
