"""Placement heuristic registry: each scoring strategy is a class registered via decorator.

Usage:
    @heuristic(PackingHeuristic.BEST_AREA_FIT, description="Smallest leftover area")
    class BestAreaFit:
        def score(self, free: Rect, w: float, h: float) -> tuple[float, float]:
            ...

Lower scores win. Scores are tuples so a strategy can name its own tiebreak;
the packer breaks any remaining tie on the free rectangle's (y, x).
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from scopebox.utils.geometry import Rect

logger = logging.getLogger(__name__)


class PackingHeuristic(str, enum.Enum):
    BEST_SHORT_SIDE_FIT = "best_short_side_fit"
    BEST_AREA_FIT = "best_area_fit"
    BEST_LONG_SIDE_FIT = "best_long_side_fit"

    @classmethod
    def parse(cls, value: str | PackingHeuristic) -> PackingHeuristic:
        """Accept enum values, snake_case names or the host's PascalCase names."""
        if isinstance(value, cls):
            return value
        normalized = "".join(ch for ch in str(value).lower() if ch.isalnum())
        for member in cls:
            if member.value.replace("_", "") == normalized:
                return member
        # Imported lazily: config imports this module.
        from scopebox.engine.config import LayoutConfigError

        raise LayoutConfigError(f"Unknown packing heuristic: {value!r}")


class PlacementScorer(Protocol):
    def score(self, free: Rect, w: float, h: float) -> tuple[float, float]: ...


@dataclass
class HeuristicSpec:
    kind: PackingHeuristic
    scorer: PlacementScorer
    description: str = ""


class HeuristicRegistry:
    """Registry of placement scoring strategies."""

    def __init__(self) -> None:
        self._heuristics: dict[PackingHeuristic, HeuristicSpec] = {}

    def register(self, spec: HeuristicSpec) -> None:
        if spec.kind in self._heuristics:
            raise ValueError(f"Duplicate heuristic: {spec.kind.value}")
        self._heuristics[spec.kind] = spec
        logger.debug("Registered packing heuristic %s", spec.kind.value)

    def get(self, kind: PackingHeuristic) -> PlacementScorer:
        return self._heuristics[kind].scorer

    def all(self) -> list[HeuristicSpec]:
        return sorted(self._heuristics.values(), key=lambda s: s.kind.value)

    @property
    def count(self) -> int:
        return len(self._heuristics)


# Module-level singleton
_registry = HeuristicRegistry()


def get_heuristic_registry() -> HeuristicRegistry:
    return _registry


def get_scorer(kind: PackingHeuristic) -> PlacementScorer:
    return _registry.get(kind)


def heuristic(kind: PackingHeuristic, *, description: str = ""):
    """Class decorator registering a placement scorer."""

    def decorator(cls):
        _registry.register(HeuristicSpec(kind=kind, scorer=cls(), description=description))
        return cls

    return decorator


@heuristic(
    PackingHeuristic.BEST_SHORT_SIDE_FIT,
    description="Minimize the smaller of the two leftover margins",
)
class BestShortSideFit:
    def score(self, free: Rect, w: float, h: float) -> tuple[float, float]:
        leftover_w = free.w - w
        leftover_h = free.h - h
        return (min(leftover_w, leftover_h), max(leftover_w, leftover_h))


@heuristic(
    PackingHeuristic.BEST_AREA_FIT,
    description="Minimize the leftover area, then the short side",
)
class BestAreaFit:
    def score(self, free: Rect, w: float, h: float) -> tuple[float, float]:
        leftover_area = free.area - w * h
        return (leftover_area, min(free.w - w, free.h - h))


@heuristic(
    PackingHeuristic.BEST_LONG_SIDE_FIT,
    description="Minimize the larger of the two leftover margins",
)
class BestLongSideFit:
    def score(self, free: Rect, w: float, h: float) -> tuple[float, float]:
        leftover_w = free.w - w
        leftover_h = free.h - h
        return (max(leftover_w, leftover_h), min(leftover_w, leftover_h))
