"""Notification model for in-app job completion messages."""

from sqlalchemy import Column, String, DateTime, ForeignKey, Boolean, Text, Index

from tech_radar.core.base import Base, utcnow


class Notification(Base):
    """One-shot message created when a job reaches a terminal state."""
    
    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_is_read_created_at", "is_read", "created_at"),
    )
    
    id = Column(String(36), primary_key=True)
    # Reference only; notifications do not own the job lifecycle
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    
    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, job_id={self.job_id}, is_read={self.is_read})>"
