"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from scopebox.engine.config import LayoutConfig
from scopebox.engine.heuristics import get_heuristic_registry
from scopebox.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        heuristics=[spec.kind.value for spec in get_heuristic_registry().all()],
    )


@router.get("/defaults")
async def defaults() -> dict:
    """The layout options used when a request leaves them unset."""
    return LayoutConfig().to_options()
