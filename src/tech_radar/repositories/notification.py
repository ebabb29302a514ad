"""Notification repository for database operations."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session
import structlog

from tech_radar.models.notification import Notification
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class NotificationRepository(BaseRepository[Notification]):
    """Repository for the single global notification inbox."""

    def __init__(self):
        super().__init__(Notification)

    def create_notification(
        self,
        db: Session,
        notification_id: str,
        job_id: str,
        message: str
    ) -> Notification:
        """Insert an unread notification for a job.

        Args:
            db: Database session
            notification_id: Unique notification identifier
            job_id: Job the notification refers to
            message: Human-readable text

        Returns:
            Created notification
        """
        return self.create(
            db,
            id=notification_id,
            job_id=job_id,
            message=message,
            is_read=False
        )

    def get_unread_notifications(self, db: Session) -> List[Notification]:
        """Get unread notifications, most recent first."""
        return (
            db.query(Notification)
            .filter(Notification.is_read.is_(False))
            .order_by(Notification.created_at.desc())
            .all()
        )

    def get_for_job(self, db: Session, job_id: str) -> List[Notification]:
        """Get every notification referring to one job."""
        return (
            db.query(Notification)
            .filter(Notification.job_id == job_id)
            .order_by(Notification.created_at.asc())
            .all()
        )

    def mark_notifications_read(self, db: Session) -> int:
        """Mark every unread notification as read.

        Returns:
            Number of notifications updated
        """
        updated = (
            db.query(Notification)
            .filter(Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        db.commit()

        logger.info("Notifications marked read", count=updated)
        return updated

    def purge_before(
        self,
        db: Session,
        cutoff: datetime,
        job_ids: Optional[Sequence[str]] = None
    ) -> int:
        """Delete notifications older than ``cutoff`` or tied to purged jobs.

        Args:
            db: Database session
            cutoff: Notifications created before this are removed
            job_ids: Jobs being purged; their notifications go regardless of age

        Returns:
            Number of notifications deleted
        """
        condition = Notification.created_at < cutoff
        if job_ids:
            condition = or_(condition, Notification.job_id.in_(list(job_ids)))

        deleted = db.query(Notification).filter(condition).delete(synchronize_session=False)
        db.commit()

        if deleted:
            logger.info("Notifications purged", count=deleted, cutoff=cutoff.isoformat())
        return deleted
