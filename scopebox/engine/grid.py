"""Grid layout selection for a tier of loose leaves.

Packing many leaves into a single row of a short, wide box produces slivers
too narrow for a label. When that happens, a few row counts are tried and the
one whose cells come closest to a comfortable reading aspect ratio wins.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from scopebox.engine.config import LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridLayout:
    rows: int
    cols: int
    cell_aspect: float
    proportional: bool = False
    # Target (w, h) per item, in the order the values were given
    cell_sizes: tuple[tuple[float, float], ...] = ()

    @property
    def is_grid(self) -> bool:
        return self.rows > 1


def single_row_aspect(count: int, region_w: float, region_h: float) -> float:
    """Aspect ratio of one cell when ``count`` items share a single row."""
    if count <= 0 or region_h <= 0:
        return 0.0
    return (region_w / count) / region_h


def _readability_key(ratio: float, config: LayoutConfig) -> tuple[float, float]:
    """Lower is better: distance outside the readable band, then distance to ideal."""
    lo, hi = config.grid_min_readable_aspect, config.grid_max_readable_aspect
    outside = lo - ratio if ratio < lo else (ratio - hi if ratio > hi else 0.0)
    return (outside, abs(ratio - config.grid_ideal_aspect))


def select_grid(
    values: list[float],
    region_w: float,
    region_h: float,
    config: LayoutConfig,
) -> GridLayout:
    """Pick a rows×cols arrangement for leaves with the given values.

    Returns a single-row layout (``rows == 1``, no cell sizes) unless some
    grid reads better than one row.
    """
    n = len(values)
    ratio = single_row_aspect(n, region_w, region_h)
    single_row = GridLayout(rows=1, cols=max(n, 1), cell_aspect=ratio)
    if n < 2 or region_w <= 0 or region_h <= 0:
        return single_row

    if ratio >= config.grid_min_readable_aspect and n < config.grid_threshold_child_count:
        return single_row

    best_rows, best_cols = 1, n
    best_key = _readability_key(ratio, config)
    best_ratio = ratio
    for rows in range(2, min(config.grid_max_rows, n) + 1):
        cols = math.ceil(n / rows)
        if math.ceil(n / cols) != rows:
            continue  # would leave a whole row empty
        cell_w, cell_h = region_w / cols, region_h / rows
        if cell_w < config.min_box_size or cell_h < config.min_box_size:
            continue
        cell_ratio = cell_w / cell_h
        key = _readability_key(cell_ratio, config)
        logger.debug("Grid %dx%d: cell aspect %.2f", rows, cols, cell_ratio)
        if key < best_key:
            best_rows, best_cols, best_key, best_ratio = rows, cols, key, cell_ratio

    if best_rows == 1:
        return single_row

    positive = [v for v in values if v > 0]
    proportional = bool(positive) and (
        max(positive) / min(positive) > config.grid_value_disparity_ratio
    )
    cells = _cell_sizes(
        values, best_rows, best_cols, region_w, region_h, proportional, config.min_box_size
    )
    return GridLayout(
        rows=best_rows,
        cols=best_cols,
        cell_aspect=best_ratio,
        proportional=proportional,
        cell_sizes=cells,
    )


def _cell_sizes(
    values: list[float],
    rows: int,
    cols: int,
    region_w: float,
    region_h: float,
    proportional: bool,
    min_width: float = 0.0,
) -> tuple[tuple[float, float], ...]:
    row_h = region_h / rows
    if not proportional:
        return tuple((region_w / cols, row_h) for _ in values)

    # Row-major: each row's widths are split by value, rows keep equal height.
    # Low-value cells are floored at the minimum box width, so a row may overflow.
    sizes: list[tuple[float, float]] = []
    for start in range(0, len(values), cols):
        row = values[start : start + cols]
        row_total = sum(row)
        for v in row:
            share = v / row_total if row_total > 0 else 1.0 / len(row)
            sizes.append((max(share * region_w, min_width), row_h))
    return tuple(sizes)
