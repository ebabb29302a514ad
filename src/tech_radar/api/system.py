"""Operational endpoints: health and API key presence."""

from fastapi import APIRouter, Request

from tech_radar.core.config import settings
from tech_radar.core.database import db_manager
from tech_radar.schemas.system import HealthResponse, KeyCheckResponse

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Report database connectivity and whether the worker loop is alive."""
    worker = getattr(request.app.state, "worker", None)
    return HealthResponse(
        ok=True,
        database=db_manager.health_check(),
        worker_running=bool(worker and worker.is_running)
    )


@router.get("/keycheck", response_model=KeyCheckResponse)
async def key_check():
    """Report whether GEMINI_API_KEY is loaded, exposing only a short prefix."""
    key = settings.gemini_api_key.strip()
    return KeyCheckResponse(
        present=bool(key),
        prefix=f"{key[:6]}..." if key else "",
        length=len(key)
    )
