"""Wire models for the scope tree and layout options."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from scopebox.engine.config import LayoutConfig
from scopebox.engine.nodes import InputNode, SourceLocation, SourcePosition


class Position(BaseModel):
    line: int = Field(..., description="1-based line")
    column: int = Field(..., description="0-based column")


class Location(BaseModel):
    start: Position
    end: Position


class ScopeNode(BaseModel):
    """One node of the scope tree as the host sends it."""

    id: str = Field(..., description="Unique node id")
    category: str = Field(default="Other", description="Node category, e.g. Function or Class")
    value: float = Field(default=0.0, description="Size weight; <= 0 means not laid out")
    label: str = ""
    source: str | None = None
    loc: Location | None = None
    meta: dict[str, Any] = Field(default_factory=dict)
    children: list[ScopeNode] = Field(default_factory=list)

    def to_input_node(self) -> InputNode:
        loc = None
        if self.loc is not None:
            loc = SourceLocation(
                start=SourcePosition(self.loc.start.line, self.loc.start.column),
                end=SourcePosition(self.loc.end.line, self.loc.end.column),
            )
        return InputNode(
            id=self.id,
            category=self.category,
            value=self.value,
            children=tuple(c.to_input_node() for c in self.children),
            label=self.label,
            source=self.source,
            loc=loc,
            meta=dict(self.meta),
        )


class LayoutOptions(BaseModel):
    """Per-request overrides of LayoutConfig. Keys may be camelCase or snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    min_box_size: float | None = None
    min_text_width: float | None = None
    min_text_height: float | None = None
    leaf_min_width: float | None = None
    leaf_min_height: float | None = None
    pref_width: float | None = None
    pref_height: float | None = None
    min_aspect_ratio: float | None = None
    max_aspect_ratio: float | None = None
    header_height: float | None = None
    min_header_height: float | None = None
    padding: float | None = None
    grid_threshold_child_count: int | None = None
    grid_min_readable_aspect: float | None = None
    grid_max_readable_aspect: float | None = None
    grid_ideal_aspect: float | None = None
    grid_max_rows: int | None = None
    grid_value_disparity_ratio: float | None = None
    utilization_low_threshold: float | None = None
    utilization_critical_threshold: float | None = None
    utilization_max_scale: float | None = None
    packing_heuristic: str | None = None
    min_usable_residual_width: float | None = None
    min_usable_residual_height: float | None = None
    fallback_width_fraction: float | None = None
    fallback_max_aspect_ratio: float | None = None
    max_depth: int | None = None
    collect_free_rectangles: bool | None = None

    def to_config(self, default_heuristic: str | None = None) -> LayoutConfig:
        """Build a validated LayoutConfig; raises LayoutConfigError when inconsistent."""
        options = self.model_dump(exclude_none=True)
        if default_heuristic and "packing_heuristic" not in options:
            options["packing_heuristic"] = default_heuristic
        return LayoutConfig.from_options(options)
