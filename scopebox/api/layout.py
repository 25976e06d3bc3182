"""POST /api/layout: lay out a scope tree in a viewport."""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from scopebox.config import Settings
from scopebox.dependencies import get_settings
from scopebox.engine.config import LayoutConfig, LayoutConfigError
from scopebox.engine.diagnostics import DiagnosticsRecorder
from scopebox.engine.nodes import LayoutNode
from scopebox.engine.orchestrator import compute_layout
from scopebox.engine.validation import validate_layout
from scopebox.models.requests import LayoutRequest
from scopebox.models.responses import LayoutEventModel, LayoutNodeModel, LayoutResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _run_layout(
    req: LayoutRequest,
    config: LayoutConfig,
    recorder: DiagnosticsRecorder | None,
    validate: bool,
) -> tuple[LayoutNode, list[str]]:
    result = compute_layout(
        req.tree.to_input_node(), req.width, req.height, config, diagnostics=recorder
    )
    issues: list[str] = []
    if validate:
        viewport = (max(req.width, 0.0), max(req.height, 0.0))
        issues = validate_layout(result, config, viewport=viewport)
    return result, issues


@router.post("/layout", response_model=LayoutResponse)
async def layout(req: LayoutRequest, settings: Settings = Depends(get_settings)) -> LayoutResponse:
    start = time.perf_counter()

    try:
        config = req.options.to_config(default_heuristic=settings.default_packing_heuristic)
    except LayoutConfigError as e:
        logger.warning("Rejected layout options: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    recorder = DiagnosticsRecorder() if req.include_events else None
    validate = req.validate_result or settings.validate_layouts

    # Packing is CPU-bound; keep it off the event loop
    result, issues = await asyncio.get_running_loop().run_in_executor(
        None, _run_layout, req, config, recorder, validate
    )

    elapsed = (time.perf_counter() - start) * 1000
    return LayoutResponse(
        layout=LayoutNodeModel.from_layout(result),
        processing_time_ms=round(elapsed, 1),
        node_count=result.node_count,
        hidden_count=result.total_hidden,
        issues=issues,
        events=[LayoutEventModel.from_event(e) for e in recorder.events] if recorder else [],
    )
