"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from scopebox.engine.diagnostics import LayoutEvent
from scopebox.engine.nodes import LayoutNode
from scopebox.utils.geometry import Rect


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    heuristics: list[str] = Field(default_factory=list)


class RectModel(BaseModel):
    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_rect(cls, rect: Rect) -> RectModel:
        return cls(x=rect.x, y=rect.y, w=rect.w, h=rect.h)


class LayoutNodeModel(BaseModel):
    id: str
    category: str
    label: str = ""
    value: float = 0.0
    x: float
    y: float
    w: float
    h: float
    render_mode: str
    depth: int = 0
    is_container: bool = False
    has_hidden_children: bool = False
    hidden_children_count: int = 0
    is_constrained_by_depth: bool = False
    hidden_reason: str | None = None
    content_rect: RectModel | None = None
    free_rects: list[RectModel] = Field(default_factory=list)
    children: list[LayoutNodeModel] = Field(default_factory=list)

    @classmethod
    def from_layout(cls, node: LayoutNode) -> LayoutNodeModel:
        return cls(
            id=node.id,
            category=node.category,
            label=node.label,
            value=node.value,
            x=node.x,
            y=node.y,
            w=node.w,
            h=node.h,
            render_mode=node.render_mode.value,
            depth=node.depth,
            is_container=node.is_container,
            has_hidden_children=node.has_hidden_children,
            hidden_children_count=node.hidden_children_count,
            is_constrained_by_depth=node.is_constrained_by_depth,
            hidden_reason=node.hidden_reason.value if node.hidden_reason else None,
            content_rect=RectModel.from_rect(node.content_rect) if node.content_rect else None,
            free_rects=[RectModel.from_rect(r) for r in node.free_rects],
            children=[cls.from_layout(c) for c in node.children],
        )


class LayoutEventModel(BaseModel):
    kind: str
    node_id: str
    depth: int
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: LayoutEvent) -> LayoutEventModel:
        return cls(
            kind=event.kind.value,
            node_id=event.node_id,
            depth=event.depth,
            details=dict(event.details),
        )


class LayoutResponse(BaseModel):
    layout: LayoutNodeModel
    processing_time_ms: float = 0.0
    node_count: int = 0
    hidden_count: int = 0
    issues: list[str] = Field(default_factory=list)
    events: list[LayoutEventModel] = Field(default_factory=list)
