"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .job import JobRepository
from .notification import NotificationRepository

__all__ = [
    "BaseRepository",
    "JobRepository",
    "NotificationRepository"
]
