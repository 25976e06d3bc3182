"""Node model: the read-only input tree and the layout tree built from it.

Input nodes come from the scope-tree builder; layout nodes are produced fresh
on every layout pass, built bottom-up and never mutated afterwards.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from scopebox.utils.geometry import Rect


class RenderMode(str, enum.Enum):
    TEXT = "text"  # label fits
    BOX = "box"  # colored marker only
    NONE = "none"  # not rendered


class HiddenReason(str, enum.Enum):
    SIZE_CONSTRAINTS = "size_constraints"
    BIN_PACKING_CONSTRAINTS = "bin_packing_constraints"
    DEPTH_LIMIT = "depth_limit"


@dataclass(frozen=True)
class SourcePosition:
    line: int  # 1-based
    column: int  # 0-based


@dataclass(frozen=True)
class SourceLocation:
    start: SourcePosition
    end: SourcePosition


@dataclass(frozen=True, eq=False)
class InputNode:
    """One node of the scope tree. Opaque fields are passed through untouched."""

    id: str
    category: str = "Other"
    value: float = 0.0
    children: tuple[InputNode, ...] = ()
    label: str = ""
    source: str | None = None
    loc: SourceLocation | None = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    @property
    def weight(self) -> float:
        """Value usable for packing: negative, NaN and infinite values count as 0."""
        v = self.value
        if not isinstance(v, (int, float)) or not math.isfinite(v) or v < 0:
            return 0.0
        return float(v)

    @property
    def viable_children(self) -> list[InputNode]:
        return [c for c in self.children if c.weight > 0]

    @property
    def is_container(self) -> bool:
        return any(c.weight > 0 for c in self.children)

    def descendant_count(self) -> int:
        return sum(1 + c.descendant_count() for c in self.children)

    def max_depth(self) -> int:
        if not self.children:
            return 0
        return 1 + max(c.max_depth() for c in self.children)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InputNode:
        """Build a tree from the host's JSON shape.

        Missing ``children`` means none; any keys besides the known ones end up
        in ``meta``.
        """
        known = {"id", "category", "value", "children", "label", "source", "loc", "meta"}
        loc = data.get("loc")
        meta = dict(data.get("meta") or {})
        meta.update({k: v for k, v in data.items() if k not in known})
        return cls(
            id=str(data["id"]),
            category=str(data.get("category") or "Other"),
            value=data.get("value") or 0.0,
            children=tuple(cls.from_dict(c) for c in data.get("children") or ()),
            label=str(data.get("label") or ""),
            source=data.get("source"),
            loc=_parse_loc(loc) if loc else None,
            meta=meta,
        )


def _parse_loc(loc: Mapping[str, Any]) -> SourceLocation:
    start, end = loc["start"], loc["end"]
    return SourceLocation(
        start=SourcePosition(int(start["line"]), int(start["column"])),
        end=SourcePosition(int(end["line"]), int(end["column"])),
    )


@dataclass(frozen=True)
class PackerItem:
    """A child waiting to be placed. Lives for one packing pass."""

    id: str
    target_w: float
    target_h: float
    value: float
    is_container: bool = False
    index: int = 0  # position among the parent's children

    @property
    def target_area(self) -> float:
        return self.target_w * self.target_h

    def resized(self, w: float, h: float) -> PackerItem:
        return PackerItem(self.id, w, h, self.value, self.is_container, self.index)


@dataclass(frozen=True)
class Placement:
    """Committed position of an item, relative to the container's content area."""

    item_id: str
    rect: Rect
    via_fallback: bool = False


@dataclass(frozen=True, eq=False)
class LayoutNode:
    """Engine output for one input node, in the root's coordinate space."""

    node: InputNode
    x: float
    y: float
    w: float
    h: float
    render_mode: RenderMode
    depth: int = 0
    is_container: bool = False
    children: tuple[LayoutNode, ...] = ()
    hidden_children_count: int = 0
    is_constrained_by_depth: bool = False
    hidden_reason: HiddenReason | None = None
    content_rect: Rect | None = None
    free_rects: tuple[Rect, ...] = ()

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def category(self) -> str:
        return self.node.category

    @property
    def label(self) -> str:
        return self.node.label

    @property
    def value(self) -> float:
        return self.node.weight

    @property
    def has_hidden_children(self) -> bool:
        return self.hidden_children_count > 0

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)

    def walk(self) -> Iterator[LayoutNode]:
        """Depth-first, pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: str) -> LayoutNode | None:
        for n in self.walk():
            if n.id == node_id:
                return n
        return None

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    @property
    def total_hidden(self) -> int:
        return sum(n.hidden_children_count for n in self.walk())
