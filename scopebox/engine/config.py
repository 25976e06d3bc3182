"""Layout configuration: every tunable threshold of the packing engine.

The defaults are calibration values taken from real scope trees, not derived
constants. Validation happens once, at construction, so the recursion never
has to check its inputs.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

from scopebox.engine.heuristics import PackingHeuristic


class LayoutConfigError(ValueError):
    """Raised when a LayoutConfig is internally inconsistent."""


@dataclass(frozen=True)
class LayoutConfig:
    """Controls sizing, packing and recovery behaviour of the layout engine."""

    # Render-mode thresholds
    min_box_size: float = 12.0
    min_text_width: float = 40.0
    min_text_height: float = 20.0

    # Leaf sizing
    leaf_min_width: float = 20.0
    leaf_min_height: float = 20.0
    pref_width: float = 80.0
    pref_height: float = 40.0
    min_aspect_ratio: float = 1.0
    max_aspect_ratio: float = 4.0

    # Container chrome
    header_height: float = 25.0
    min_header_height: float = 16.0
    header_depth_decay: float = 0.03  # header shrinks 3% per level...
    header_min_depth_factor: float = 0.85  # ...down to 85% of header_height
    header_max_fraction: float = 0.4  # of the container's height
    padding: float = 5.0

    # Grid selection
    grid_threshold_child_count: int = 6
    grid_min_readable_aspect: float = 0.75
    grid_max_readable_aspect: float = 6.0
    grid_ideal_aspect: float = 2.5
    grid_max_rows: int = 4
    grid_value_disparity_ratio: float = 3.0

    # Space utilization
    utilization_low_threshold: float = 0.8
    utilization_critical_threshold: float = 0.6
    utilization_max_scale: float = 3.0

    # Bin packing
    packing_heuristic: PackingHeuristic = PackingHeuristic.BEST_SHORT_SIDE_FIT
    min_usable_residual_width: float = 20.0
    min_usable_residual_height: float = 12.0

    # Adaptive fallback
    fallback_width_fraction: float = 0.98
    fallback_max_aspect_ratio: float = 6.0

    # Depth limiting (None = unlimited)
    max_depth: int | None = None

    # Debug: attach each container's leftover free rectangles to its layout node
    collect_free_rectangles: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.packing_heuristic, PackingHeuristic):
            object.__setattr__(
                self, "packing_heuristic", PackingHeuristic.parse(self.packing_heuristic)
            )
        self._validate()

    def _validate(self) -> None:
        positive = (
            "min_box_size",
            "min_text_width",
            "min_text_height",
            "leaf_min_width",
            "leaf_min_height",
            "pref_width",
            "pref_height",
            "min_aspect_ratio",
            "max_aspect_ratio",
            "grid_min_readable_aspect",
            "grid_max_readable_aspect",
            "grid_ideal_aspect",
            "utilization_max_scale",
            "fallback_max_aspect_ratio",
        )
        for name in positive:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise LayoutConfigError(f"{name} must be a positive number, got {value!r}")

        non_negative = (
            "header_height",
            "min_header_height",
            "header_depth_decay",
            "padding",
            "min_usable_residual_width",
            "min_usable_residual_height",
        )
        for name in non_negative:
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise LayoutConfigError(f"{name} must be >= 0, got {value!r}")

        if self.leaf_min_width > self.pref_width:
            raise LayoutConfigError(
                f"leaf_min_width ({self.leaf_min_width}) exceeds pref_width ({self.pref_width})"
            )
        if self.leaf_min_height > self.pref_height:
            raise LayoutConfigError(
                f"leaf_min_height ({self.leaf_min_height}) exceeds pref_height ({self.pref_height})"
            )
        if self.min_aspect_ratio > self.max_aspect_ratio:
            raise LayoutConfigError(
                f"min_aspect_ratio ({self.min_aspect_ratio}) exceeds "
                f"max_aspect_ratio ({self.max_aspect_ratio})"
            )
        if self.grid_min_readable_aspect > self.grid_max_readable_aspect:
            raise LayoutConfigError("grid_min_readable_aspect exceeds grid_max_readable_aspect")
        if not 0 < self.header_min_depth_factor <= 1:
            raise LayoutConfigError("header_min_depth_factor must be in (0, 1]")
        if not 0 < self.header_max_fraction < 1:
            raise LayoutConfigError("header_max_fraction must be in (0, 1)")
        if not 0 < self.utilization_critical_threshold <= self.utilization_low_threshold <= 1:
            raise LayoutConfigError(
                "utilization thresholds must satisfy 0 < critical <= low <= 1, got "
                f"critical={self.utilization_critical_threshold}, "
                f"low={self.utilization_low_threshold}"
            )
        if not 0 < self.fallback_width_fraction <= 1:
            raise LayoutConfigError("fallback_width_fraction must be in (0, 1]")
        if self.grid_threshold_child_count < 1:
            raise LayoutConfigError("grid_threshold_child_count must be >= 1")
        if self.grid_max_rows < 1:
            raise LayoutConfigError("grid_max_rows must be >= 1")
        if self.grid_value_disparity_ratio < 1:
            raise LayoutConfigError("grid_value_disparity_ratio must be >= 1")
        if self.max_depth is not None and self.max_depth < 0:
            raise LayoutConfigError("max_depth must be >= 0 or None")

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, **overrides: Any) -> LayoutConfig:
        """Build a config from host options, accepting camelCase or snake_case keys.

        ``minBoxSize`` and ``min_box_size`` are equivalent. Unknown keys are a
        configuration error rather than being silently ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in {**(options or {}), **overrides}.items():
            name = _snake_case(key)
            if name not in known:
                raise LayoutConfigError(f"Unknown layout option: {key}")
            if value is not None or name == "max_depth":
                kwargs[name] = value
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise LayoutConfigError(str(e)) from e

    def to_options(self) -> dict[str, Any]:
        data = asdict(self)
        data["packing_heuristic"] = self.packing_heuristic.value
        return data


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()
