"""Notification inbox endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tech_radar.core.database import get_db
from tech_radar.schemas.notification import MarkReadResponse, NotificationResponse
from tech_radar.services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=List[NotificationResponse])
async def list_unread_notifications(db: Session = Depends(get_db)):
    """Unread notifications, most recent first."""
    return NotificationService().get_unread(db)


@router.post("/read", response_model=MarkReadResponse)
async def mark_notifications_read(db: Session = Depends(get_db)):
    """Mark every unread notification as read."""
    NotificationService().mark_all_read(db)
    return MarkReadResponse(success=True)
