"""Free-rectangle pool: the unused space left inside one container's content area.

Coordinates are relative to the content area. The pool only ever splits,
shrinks or exactly merges its rectangles, so its members never overlap each
other or anything already placed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from scopebox.utils.geometry import EPSILON, Rect, contained_mask

logger = logging.getLogger(__name__)


class FreeRectanglePool:
    """Available packing space for a single container's packing pass."""

    def __init__(
        self,
        width: float,
        height: float,
        min_width: float = 20.0,
        min_height: float = 12.0,
    ) -> None:
        self.width = width
        self.height = height
        self.min_width = min_width
        self.min_height = min_height
        self._rects: list[Rect] = []
        if width > EPSILON and height > EPSILON:
            self._rects.append(Rect(0.0, 0.0, width, height))

    def __len__(self) -> int:
        return len(self._rects)

    def __iter__(self) -> Iterator[Rect]:
        return iter(tuple(self._rects))

    @property
    def rects(self) -> tuple[Rect, ...]:
        return tuple(self._rects)

    @property
    def free_area(self) -> float:
        return sum(r.area for r in self._rects)

    def is_usable(self, rect: Rect) -> bool:
        """Residuals narrower or shorter than the configured minimum are slivers."""
        return rect.w + EPSILON >= self.min_width and rect.h + EPSILON >= self.min_height

    def insert(self, rect: Rect) -> bool:
        """Add free space; returns False when the rectangle is too small to keep."""
        if rect.is_empty or not self.is_usable(rect):
            return False
        self._rects.append(rect)
        self._normalize()
        return True

    def split(self, chosen: Rect, used_w: float, used_h: float) -> list[Rect]:
        """Consume the top-left ``used_w × used_h`` of ``chosen`` (guillotine split).

        The right residual spans the chosen rectangle's full height. The bottom
        residual spans the item's width while the right residual is kept, and
        the chosen rectangle's full width otherwise, so the narrow strip is not
        lost twice. Returns the residuals that were kept.
        """
        self._rects.remove(chosen)

        used_w = min(used_w, chosen.w)
        used_h = min(used_h, chosen.h)
        right = Rect(chosen.x + used_w, chosen.y, chosen.w - used_w, chosen.h)
        keep_right = not right.is_empty and self.is_usable(right)

        bottom_w = used_w if keep_right else chosen.w
        bottom = Rect(chosen.x, chosen.y + used_h, bottom_w, chosen.h - used_h)
        keep_bottom = not bottom.is_empty and self.is_usable(bottom)

        kept = []
        if keep_right:
            kept.append(right)
        if keep_bottom:
            kept.append(bottom)
        self._rects.extend(kept)
        self._normalize()
        return kept

    def prune_contained(self) -> int:
        """Drop rectangles fully contained in another. Returns how many were removed."""
        mask = contained_mask(self._rects)
        removed = int(mask.sum())
        if removed:
            self._rects = [r for r, drop in zip(self._rects, mask) if not drop]
        return removed

    def merge_adjacent(self) -> int:
        """Merge rectangles sharing a full edge. Returns the number of merges."""
        merges = 0
        merged = True
        while merged:
            merged = False
            for i in range(len(self._rects)):
                for j in range(i + 1, len(self._rects)):
                    combined = _merge(self._rects[i], self._rects[j])
                    if combined is not None:
                        self._rects[i] = combined
                        del self._rects[j]
                        merges += 1
                        merged = True
                        break
                if merged:
                    break
        if merges:
            logger.debug("Merged %d adjacent free rectangles", merges)
        return merges

    def _normalize(self) -> None:
        self.prune_contained()
        if self.merge_adjacent():
            self.prune_contained()


def _merge(a: Rect, b: Rect) -> Rect | None:
    """Union of two rectangles if it is itself exactly a rectangle."""
    if abs(a.y - b.y) <= EPSILON and abs(a.h - b.h) <= EPSILON:
        if abs(a.right - b.x) <= EPSILON:
            return Rect(a.x, a.y, b.right - a.x, a.h)
        if abs(b.right - a.x) <= EPSILON:
            return Rect(b.x, b.y, a.right - b.x, b.h)
    if abs(a.x - b.x) <= EPSILON and abs(a.w - b.w) <= EPSILON:
        if abs(a.bottom - b.y) <= EPSILON:
            return Rect(a.x, a.y, a.w, b.bottom - a.y)
        if abs(b.bottom - a.y) <= EPSILON:
            return Rect(b.x, b.y, b.w, a.bottom - b.y)
    return None
