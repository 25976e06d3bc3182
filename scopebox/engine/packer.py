"""Guillotine bin packer over a free-rectangle pool.

One packer lives for one container's packing pass. Items are placed
top-left-anchored in whichever free rectangle the configured heuristic scores
best; ties go to the topmost, then leftmost rectangle.
"""

from __future__ import annotations

import logging

from scopebox.engine.config import LayoutConfig
from scopebox.engine.free_rects import FreeRectanglePool
from scopebox.engine.heuristics import PackingHeuristic, get_scorer
from scopebox.engine.nodes import PackerItem, Placement
from scopebox.utils.geometry import EPSILON, Rect

logger = logging.getLogger(__name__)


class BinPacker:
    """Places items into a ``width × height`` content area (local coordinates)."""

    def __init__(
        self,
        width: float,
        height: float,
        config: LayoutConfig,
        heuristic: PackingHeuristic | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.config = config
        self.heuristic = heuristic or config.packing_heuristic
        self.scorer = get_scorer(self.heuristic)
        self.pool = FreeRectanglePool(
            width,
            height,
            min_width=config.min_usable_residual_width,
            min_height=config.min_usable_residual_height,
        )
        self.placements: list[Placement] = []

    def find_placement(self, item: PackerItem) -> Rect | None:
        """Best free rectangle able to hold the item's full target, or None."""
        best: Rect | None = None
        best_key: tuple[float, ...] | None = None
        for free in self.pool:
            if not free.fits(item.target_w, item.target_h):
                continue
            key = (*self.scorer.score(free, item.target_w, item.target_h), free.y, free.x)
            if best_key is None or key < best_key:
                best, best_key = free, key
        return best

    def commit(
        self,
        free: Rect,
        item: PackerItem,
        w: float | None = None,
        h: float | None = None,
        via_fallback: bool = False,
    ) -> Placement:
        """Occupy the top-left ``w × h`` (default: the item's target) of ``free``."""
        w = min(item.target_w if w is None else w, free.w)
        h = min(item.target_h if h is None else h, free.h)
        self.pool.split(free, w, h)
        placement = Placement(item.id, Rect(free.x, free.y, w, h), via_fallback)
        self.placements.append(placement)
        return placement

    def place(self, item: PackerItem) -> Placement | None:
        free = self.find_placement(item)
        if free is None:
            return None
        return self.commit(free, item)

    def reclaim(self, placement: Placement, actual_w: float, actual_h: float) -> Placement:
        """Return the unused part of a placement to the pool.

        Called when a leaf ends up smaller than the space it was placed in. The
        leaf keeps the top-left corner of its rectangle.
        """
        r = placement.rect
        actual_w = min(actual_w, r.w)
        actual_h = min(actual_h, r.h)
        if actual_w >= r.w - EPSILON and actual_h >= r.h - EPSILON:
            return placement

        right = Rect(r.x + actual_w, r.y, r.w - actual_w, r.h)
        bottom = Rect(r.x, r.y + actual_h, actual_w, r.h - actual_h)
        for strip in (right, bottom):
            if not strip.is_empty:
                self.pool.insert(strip)

        shrunk = Placement(
            placement.item_id, Rect(r.x, r.y, actual_w, actual_h), placement.via_fallback
        )
        self.placements = [shrunk if p is placement else p for p in self.placements]
        logger.debug(
            "Reclaimed %.1f px² from %s", r.area - shrunk.rect.area, placement.item_id
        )
        return shrunk

    @property
    def used_area(self) -> float:
        return sum(p.rect.area for p in self.placements)

    @property
    def utilization(self) -> float:
        area = self.width * self.height
        return self.used_area / area if area > 0 else 0.0
