"""Leaf-node rectangle helpers. No engine imports."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Float slack for fit / containment tests on pixel coordinates.
EPSILON = 1e-6


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle: top-left corner plus width/height."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def area(self) -> float:
        return self.w * self.h

    @property
    def is_empty(self) -> bool:
        return self.w <= EPSILON or self.h <= EPSILON

    def fits(self, w: float, h: float) -> bool:
        """True if a w×h item fits inside this rectangle."""
        return self.w + EPSILON >= w and self.h + EPSILON >= h

    def contains(self, other: Rect, eps: float = EPSILON) -> bool:
        return (
            other.x >= self.x - eps
            and other.y >= self.y - eps
            and other.right <= self.right + eps
            and other.bottom <= self.bottom + eps
        )

    def intersection_area(self, other: Rect) -> float:
        x_overlap = max(0.0, min(self.right, other.right) - max(self.x, other.x))
        y_overlap = max(0.0, min(self.bottom, other.bottom) - max(self.y, other.y))
        return x_overlap * y_overlap

    def translate(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.w, self.h)

    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax), the form shapely's ``box`` takes."""
        return (self.x, self.y, self.right, self.bottom)


def rects_to_array(rects: list[Rect] | tuple[Rect, ...]) -> NDArray[np.float64]:
    """Nx4 array of (xmin, ymin, xmax, ymax)."""
    if not rects:
        return np.empty((0, 4))
    return np.array([r.bounds() for r in rects], dtype=np.float64)


def contained_mask(rects: list[Rect] | tuple[Rect, ...]) -> NDArray[np.bool_]:
    """Mask of rectangles lying fully inside some other rectangle of the set.

    Of two identical rectangles only the later one is flagged, so pruning with
    this mask never removes both.
    """
    n = len(rects)
    if n < 2:
        return np.zeros(n, dtype=bool)

    b = rects_to_array(rects)
    # inside[i, j] = rect i lies within rect j
    inside = (
        (b[:, None, 0] >= b[None, :, 0] - EPSILON)
        & (b[:, None, 1] >= b[None, :, 1] - EPSILON)
        & (b[:, None, 2] <= b[None, :, 2] + EPSILON)
        & (b[:, None, 3] <= b[None, :, 3] + EPSILON)
    )
    np.fill_diagonal(inside, False)

    # Mutual containment means duplicates: keep the earliest of each group.
    mutual = inside & inside.T
    later = np.triu(np.ones((n, n), dtype=bool), k=1).T  # later[i, j] = i > j
    strict = inside & ~mutual
    return strict.any(axis=1) | (mutual & later).any(axis=1)


def total_area(sizes: NDArray[np.float64]) -> float:
    """Sum of w*h over an Nx2 array of sizes."""
    if len(sizes) == 0:
        return 0.0
    return float(np.sum(sizes[:, 0] * sizes[:, 1]))


def aspect_ratio(w: float, h: float) -> float:
    """w / h, infinite for zero height."""
    if h <= 0:
        return float("inf")
    return w / h
