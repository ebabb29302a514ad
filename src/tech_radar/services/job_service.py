"""Analysis job submission and lookup service."""

from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session
import structlog

from tech_radar.core.error_handling import ValidationError
from tech_radar.models.job import AnalysisJob
from tech_radar.repositories.job import JobRepository

logger = structlog.get_logger(__name__)


class JobService:
    """Service for creating and reading analysis jobs."""
    
    def __init__(self):
        self.repository = JobRepository()
    
    def submit_job(
        self,
        db: Session,
        cv_content: Optional[str],
        target_role: Optional[str]
    ) -> AnalysisJob:
        """Validate input and enqueue a pending analysis job.
        
        Args:
            db: Database session
            cv_content: CV text (already extracted from a PDF if one was uploaded)
            target_role: Role to analyze the CV against
            
        Returns:
            Created pending job
            
        Raises:
            ValidationError: If CV content or target role is missing
        """
        cv_content = (cv_content or "").strip()
        target_role = (target_role or "").strip()
        
        if not cv_content:
            raise ValidationError("CV content is required.", field="cvText")
        if not target_role:
            raise ValidationError("Target role is required.", field="targetRole")
        
        job = self.repository.create_job(
            db,
            job_id=str(uuid4()),
            cv_content=cv_content,
            target_role=target_role
        )
        
        logger.info(
            "Analysis queued",
            job_id=job.id,
            target_role=target_role,
            cv_length=len(cv_content)
        )
        return job
    
    def get_job(self, db: Session, job_id: str) -> Optional[AnalysisJob]:
        """Get a job by id, or None if it does not exist."""
        return self.repository.get_job(db, job_id)
