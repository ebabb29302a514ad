"""Service layer for business logic."""

from .job_service import JobService
from .notification_service import NotificationService

__all__ = [
    "JobService",
    "NotificationService"
]
