"""Background workers."""

from .radar_worker import RadarWorker

__all__ = ["RadarWorker"]
