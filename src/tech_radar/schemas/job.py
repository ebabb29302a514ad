"""Pydantic schemas for analysis jobs."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tech_radar.models.job import JobStatus


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys for the web client."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class JobResponse(CamelModel):
    """Schema for a job row returned by the result endpoint."""
    
    id: str
    status: JobStatus
    cv_content: str
    target_role: str
    result: Optional[str] = Field(None, description="Serialized radar JSON once completed")
    error: Optional[str] = Field(None, description="Error message once failed")
    created_at: datetime
    updated_at: datetime


class AnalyzeResponse(CamelModel):
    """Schema for the submission acknowledgement."""
    
    message: str = "Analysis queued successfully"
    job_id: str
