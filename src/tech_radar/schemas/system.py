"""Pydantic schemas for operational endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness of the API, database and worker."""
    
    ok: bool
    database: bool
    worker_running: bool


class KeyCheckResponse(BaseModel):
    """Whether an AI API key is configured, without revealing it."""
    
    present: bool
    prefix: str
    length: int
