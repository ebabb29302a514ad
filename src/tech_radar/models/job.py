"""Analysis job model for tracking CV analysis requests."""

from enum import Enum
from typing import List

from sqlalchemy import Column, String, DateTime, Text, Index

from tech_radar.core.base import Base, utcnow


class JobStatus(str, Enum):
    """Lifecycle states of an analysis job."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


# Allowed forward transitions; nothing ever returns to PENDING
JOB_TRANSITIONS = {
    JobStatus.PENDING: {JobStatus.PROCESSING},
    JobStatus.PROCESSING: {JobStatus.COMPLETED, JobStatus.FAILED},
    JobStatus.COMPLETED: set(),
    JobStatus.FAILED: set(),
}


def allowed_predecessors(status: JobStatus) -> List[str]:
    """Stored status values a job may move to ``status`` from."""
    status = JobStatus(status)
    return [
        previous.value
        for previous, targets in JOB_TRANSITIONS.items()
        if status in targets
    ]


class AnalysisJob(Base):
    """One request to analyze a CV against a target role."""
    
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_jobs_status_created_at", "status", "created_at"),
    )
    
    id = Column(String(36), primary_key=True)
    status = Column(String(20), default=JobStatus.PENDING.value, nullable=False)
    cv_content = Column(Text, nullable=False)
    target_role = Column(String(255), nullable=False)
    result = Column(Text, nullable=True)  # JSON text
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    
    def __repr__(self) -> str:
        return f"<AnalysisJob(id={self.id}, status='{self.status}', target_role='{self.target_role}')>"
    
    @property
    def is_terminal(self) -> bool:
        """Whether the job has reached completed or failed."""
        return JobStatus(self.status).is_terminal
