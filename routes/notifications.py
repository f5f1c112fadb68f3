# routes/notifications.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.db import get_db
from config.security import get_current_user
from model.user import Users
from schema.notification import NotificationOut
from schema.user import MessageOut
from services import notification_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationOut])
def get_notifications(db: Session = Depends(get_db), current_user: Users = Depends(get_current_user)):
    """List the caller's notifications and mark them all read."""
    return notification_service.list_notifications(db, current_user)


@router.delete("", response_model=MessageOut)
def delete_notifications(db: Session = Depends(get_db), current_user: Users = Depends(get_current_user)):
    notification_service.clear_notifications(db, current_user)
    return MessageOut(message="Notifications deleted")
