"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from scopebox.models.tree import LayoutOptions, ScopeNode


class LayoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tree: ScopeNode = Field(..., description="Root of the scope tree")
    width: float = Field(..., description="Viewport width in px")
    height: float = Field(..., description="Viewport height in px")
    options: LayoutOptions = Field(
        default_factory=LayoutOptions,
        description="Layout option overrides (camelCase or snake_case)",
    )
    validate_result: bool = Field(
        default=False,
        alias="validate",
        description="Run structural checks on the result and report issues",
    )
    include_events: bool = Field(
        default=False,
        description="Return the diagnostics events recorded during layout",
    )
