"""Pydantic schemas for notifications."""

from datetime import datetime

from .job import CamelModel


class NotificationResponse(CamelModel):
    """Schema for an inbox notification."""
    
    id: str
    job_id: str
    message: str
    is_read: bool
    created_at: datetime


class MarkReadResponse(CamelModel):
    """Schema for the mark-all-read acknowledgement."""
    
    success: bool = True
