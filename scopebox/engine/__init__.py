"""scopebox hierarchical packing layout engine."""

from scopebox.engine.config import LayoutConfig, LayoutConfigError
from scopebox.engine.diagnostics import DiagnosticsRecorder, EventKind, LayoutEvent
from scopebox.engine.heuristics import PackingHeuristic, get_heuristic_registry
from scopebox.engine.nodes import HiddenReason, InputNode, LayoutNode, RenderMode
from scopebox.engine.orchestrator import LayoutEngine, compute_layout, layout
from scopebox.engine.validation import validate_layout

__all__ = [
    "LayoutConfig",
    "LayoutConfigError",
    "DiagnosticsRecorder",
    "EventKind",
    "LayoutEvent",
    "PackingHeuristic",
    "get_heuristic_registry",
    "HiddenReason",
    "InputNode",
    "LayoutNode",
    "RenderMode",
    "LayoutEngine",
    "compute_layout",
    "layout",
    "validate_layout",
]
