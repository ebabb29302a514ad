"""Database models for the tech radar job store."""

from .job import AnalysisJob, JobStatus, JOB_TRANSITIONS, allowed_predecessors
from .notification import Notification

__all__ = ["AnalysisJob", "JobStatus", "JOB_TRANSITIONS", "allowed_predecessors", "Notification"]
