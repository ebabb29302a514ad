"""Pydantic schemas for data validation and serialization."""

from .job import CamelModel, JobResponse, AnalyzeResponse
from .notification import NotificationResponse, MarkReadResponse
from .system import HealthResponse, KeyCheckResponse

__all__ = [
    "CamelModel", "JobResponse", "AnalyzeResponse",
    "NotificationResponse", "MarkReadResponse",
    "HealthResponse", "KeyCheckResponse"
]
