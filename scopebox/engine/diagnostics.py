"""Structured diagnostics for a layout pass.

Callers that want to see why a layout came out the way it did pass a callback
to ``compute_layout``; the engine keeps no record of its own.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class EventKind(str, enum.Enum):
    CONTAINER_PACKED = "container_packed"
    GRID_SELECTED = "grid_selected"
    UTILIZATION_ADJUSTED = "utilization_adjusted"
    FALLBACK_USED = "fallback_used"
    ITEM_HIDDEN = "item_hidden"
    DEPTH_LIMITED = "depth_limited"


@dataclass(frozen=True)
class LayoutEvent:
    kind: EventKind
    node_id: str
    depth: int
    details: dict[str, Any] = field(default_factory=dict)


DiagnosticsCallback = Callable[[LayoutEvent], None]


class DiagnosticsRecorder:
    """Callback that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[LayoutEvent] = []

    def __call__(self, event: LayoutEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> list[LayoutEvent]:
        return [e for e in self.events if e.kind == kind]


def emit(
    callback: DiagnosticsCallback | None,
    kind: EventKind,
    node_id: str,
    depth: int,
    **details: Any,
) -> None:
    if callback is not None:
        callback(LayoutEvent(kind=kind, node_id=node_id, depth=depth, details=details))
