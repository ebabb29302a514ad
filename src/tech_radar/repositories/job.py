"""Analysis job repository for database operations."""

from datetime import datetime
from typing import Optional, List

from sqlalchemy.orm import Session
import structlog

from tech_radar.core.base import utcnow
from tech_radar.models.job import AnalysisJob, JobStatus, allowed_predecessors
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class JobRepository(BaseRepository[AnalysisJob]):
    """Repository for AnalysisJob operations.

    Every write is a single statement touching one row, so no explicit
    transaction or locking is needed beyond what the database provides.
    """

    def __init__(self):
        super().__init__(AnalysisJob)

    def create_job(
        self,
        db: Session,
        job_id: str,
        cv_content: str,
        target_role: str,
        created_at: Optional[datetime] = None
    ) -> AnalysisJob:
        """Insert a new job in ``pending`` state.

        Args:
            db: Database session
            job_id: Unique job identifier
            cv_content: Raw CV text
            target_role: Role the CV is analyzed against
            created_at: Creation timestamp (defaults to now)

        Returns:
            Created job

        Raises:
            DatabaseError: If a job with the same id already exists
        """
        now = created_at or utcnow()
        job = self.create(
            db,
            id=job_id,
            status=JobStatus.PENDING.value,
            cv_content=cv_content,
            target_role=target_role,
            created_at=now,
            updated_at=now
        )
        logger.info("Job created", job_id=job_id, target_role=target_role)
        return job

    def get_job(self, db: Session, job_id: str) -> Optional[AnalysisJob]:
        """Get a job by id, or None if it does not exist."""
        return self.get_by_id(db, job_id)

    def get_pending_jobs(self, db: Session) -> List[AnalysisJob]:
        """Get all pending jobs, oldest first.

        Args:
            db: Database session

        Returns:
            Pending jobs ordered by creation time ascending
        """
        return (
            db.query(AnalysisJob)
            .filter(AnalysisJob.status == JobStatus.PENDING.value)
            .order_by(AnalysisJob.created_at.asc())
            .all()
        )

    def update_job_status(
        self,
        db: Session,
        job_id: str,
        status: JobStatus,
        result: Optional[str] = None,
        error: Optional[str] = None
    ) -> bool:
        """Move one job forward to ``status`` and store result, error and updated_at.

        The update only matches a row whose current status may precede
        ``status`` in ``JOB_TRANSITIONS``, so a finished job is never
        overwritten and nothing returns to pending.

        Args:
            db: Database session
            job_id: Job identifier
            status: New status
            result: Serialized result payload (completed jobs)
            error: Error message (failed jobs)

        Returns:
            True if a row was updated, False if the job does not exist or
            its current status does not allow the move
        """
        status = JobStatus(status)
        predecessors = allowed_predecessors(status)
        if not predecessors:
            logger.warning("Status transition not allowed", job_id=job_id, status=status.value)
            return False

        updated = (
            db.query(AnalysisJob)
            .filter(
                AnalysisJob.id == job_id,
                AnalysisJob.status.in_(predecessors)
            )
            .update(
                {
                    AnalysisJob.status: status.value,
                    AnalysisJob.result: result,
                    AnalysisJob.error: error,
                    AnalysisJob.updated_at: utcnow(),
                },
                synchronize_session=False
            )
        )
        db.commit()

        if not updated:
            logger.warning(
                "Job not found or status transition not allowed",
                job_id=job_id,
                status=status.value
            )
            return False

        logger.info("Job status updated", job_id=job_id, status=status.value)
        return True

    def claim_job(self, db: Session, job_id: str) -> bool:
        """Move a job from pending to processing.

        The update is conditional on the row still being pending, so a job
        already claimed by an earlier or overlapping tick is left alone.

        Args:
            db: Database session
            job_id: Job identifier

        Returns:
            True if this call claimed the job
        """
        updated = (
            db.query(AnalysisJob)
            .filter(
                AnalysisJob.id == job_id,
                AnalysisJob.status == JobStatus.PENDING.value
            )
            .update(
                {
                    AnalysisJob.status: JobStatus.PROCESSING.value,
                    AnalysisJob.updated_at: utcnow(),
                },
                synchronize_session=False
            )
        )
        db.commit()

        if updated != 1:
            logger.warning("Job could not be claimed", job_id=job_id)
            return False

        logger.info("Job claimed", job_id=job_id)
        return True

    def count_by_status(self, db: Session, status: JobStatus) -> int:
        """Count jobs in one status."""
        return self.count(db, {"status": JobStatus(status).value})

    def get_finished_before(self, db: Session, cutoff: datetime) -> List[str]:
        """Ids of completed and failed jobs last updated before ``cutoff``."""
        finished = [JobStatus.COMPLETED.value, JobStatus.FAILED.value]
        return [
            row.id
            for row in db.query(AnalysisJob.id)
            .filter(
                AnalysisJob.status.in_(finished),
                AnalysisJob.updated_at < cutoff
            )
            .all()
        ]

    def delete_jobs(self, db: Session, job_ids: List[str]) -> int:
        """Delete jobs by id.

        Notifications referring to these jobs must be removed first.

        Returns:
            Number of jobs deleted
        """
        if not job_ids:
            return 0

        deleted = (
            db.query(AnalysisJob)
            .filter(AnalysisJob.id.in_(job_ids))
            .delete(synchronize_session=False)
        )
        db.commit()

        logger.info("Jobs deleted", count=deleted)
        return deleted
