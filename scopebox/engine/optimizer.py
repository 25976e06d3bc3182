"""Space-utilization optimizer: grows leaf targets when a container would look empty."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

import numpy as np

from scopebox.engine.config import LayoutConfig
from scopebox.engine.leaf_sizing import clamp_aspect
from scopebox.engine.nodes import PackerItem
from scopebox.utils.geometry import total_area

logger = logging.getLogger(__name__)


class AdjustmentMode(str, enum.Enum):
    NONE = "none"
    MODERATE = "moderate"  # below-average widths grow
    AGGRESSIVE = "aggressive"  # every leaf grows in both dimensions


@dataclass(frozen=True)
class OptimizationResult:
    items: list[PackerItem]
    utilization_before: float
    utilization_after: float
    mode: AdjustmentMode = AdjustmentMode.NONE

    @property
    def adjusted(self) -> bool:
        return self.mode is not AdjustmentMode.NONE


def utilization(items: list[PackerItem], content_w: float, content_h: float) -> float:
    """Sum of target areas over the content area (0 for an empty content area)."""
    area = content_w * content_h
    if area <= 0:
        return 0.0
    return sum(i.target_area for i in items) / area


def optimize_utilization(
    items: list[PackerItem],
    content_w: float,
    content_h: float,
    config: LayoutConfig,
) -> OptimizationResult:
    """Scale leaf targets up when the targets would leave most of the content empty.

    Pinned (container) items are never touched. Results stay within the content
    box and the leaf aspect-ratio bounds. The item order is preserved.
    """
    before = utilization(items, content_w, content_h)
    unchanged = OptimizationResult(list(items), before, before)
    if len(items) < 2 or before <= 0 or before >= config.utilization_low_threshold:
        return unchanged

    sizes = np.array([[i.target_w, i.target_h] for i in items], dtype=np.float64)
    adjustable = np.array([not i.is_container for i in items])

    if before < config.utilization_critical_threshold:
        mode = AdjustmentMode.AGGRESSIVE
        scale = min(
            config.utilization_max_scale,
            math.sqrt(config.utilization_low_threshold / before),
        )
        mask = adjustable
        sizes[mask] *= scale
    elif len(items) > 2:
        mode = AdjustmentMode.MODERATE
        scale = min(config.utilization_max_scale, math.sqrt(1.0 / before))
        areas = sizes[:, 0] * sizes[:, 1]
        mask = adjustable & (areas < areas.mean())
        sizes[mask, 0] *= scale
    else:
        return unchanged

    if not mask.any():
        return unchanged

    adjusted = []
    for item, (w, h), grow in zip(items, sizes, mask):
        if not grow:
            adjusted.append(item)
            continue
        w, h = clamp_aspect(
            min(float(w), content_w),
            min(float(h), content_h),
            config.min_aspect_ratio,
            config.max_aspect_ratio,
        )
        adjusted.append(item.resized(w, h))

    after = total_area(np.array([[i.target_w, i.target_h] for i in adjusted])) / (
        content_w * content_h
    )
    logger.debug(
        "Utilization %.2f -> %.2f (%s, scale %.2f, %d items grown)",
        before,
        after,
        mode.value,
        scale,
        int(mask.sum()),
    )
    return OptimizationResult(adjusted, before, after, mode)
