"""Notification inbox service."""

from typing import List
from uuid import uuid4

from sqlalchemy.orm import Session
import structlog

from tech_radar.models.job import JobStatus
from tech_radar.models.notification import Notification
from tech_radar.repositories.notification import NotificationRepository

logger = structlog.get_logger(__name__)


def completion_message(target_role: str) -> str:
    return f"Your analysis for {target_role} is complete!"


def failure_message(target_role: str) -> str:
    return f"Your analysis for {target_role} failed. Please try again."


class NotificationService:
    """Service for the global notification inbox."""
    
    def __init__(self):
        self.repository = NotificationRepository()
    
    def notify_job_finished(
        self,
        db: Session,
        job_id: str,
        target_role: str,
        status: JobStatus
    ) -> Notification:
        """Create the single notification for a job's terminal transition.
        
        Args:
            db: Database session
            job_id: Job that just finished
            target_role: Role the job analyzed, quoted in the message
            status: Terminal status the job moved to
            
        Returns:
            Created notification
            
        Raises:
            ValueError: If ``status`` is not terminal
        """
        status = JobStatus(status)
        if status == JobStatus.COMPLETED:
            message = completion_message(target_role)
        elif status == JobStatus.FAILED:
            message = failure_message(target_role)
        else:
            raise ValueError(f"Status is not terminal: {status.value}")
        
        notification = self.repository.create_notification(
            db,
            notification_id=str(uuid4()),
            job_id=job_id,
            message=message
        )
        logger.info(
            "Notification created",
            notification_id=notification.id,
            job_id=job_id,
            status=status.value
        )
        return notification
    
    def get_unread(self, db: Session) -> List[Notification]:
        """Unread notifications, most recent first."""
        return self.repository.get_unread_notifications(db)
    
    def mark_all_read(self, db: Session) -> int:
        """Mark every unread notification as read."""
        return self.repository.mark_notifications_read(db)
