"""HTTP API routers."""

from .analyze import router as analyze_router
from .notifications import router as notifications_router
from .system import router as system_router

__all__ = ["analyze_router", "notifications_router", "system_router"]
