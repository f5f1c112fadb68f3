# services/notification_service.py
"""
Notification feed: fan-out records created by follow and like actions, read
and cleared by their recipient.
"""
import logging
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, selectinload

from model.notification import Notification
from model.social.enum import NotificationType
from model.user import Users
from schema.notification import NotificationOut
from src.id_generator import generate_public_id
from src.projections import notification_out

logger = logging.getLogger(__name__)


def add_notification(db: Session, sender: Users, recipient: Users, type_: NotificationType) -> Notification:
    """Stage a notification in the caller's unit of work; the caller commits."""
    notification = Notification(
        notification_id=generate_public_id("notification"),
        from_user_id=sender.id,
        to_user_id=recipient.id,
        type=type_,
        read=False,
    )
    db.add(notification)
    return notification


def list_notifications(db: Session, user: Users) -> List[NotificationOut]:
    """
    All notifications addressed to ``user`` in insertion order. The returned
    ``read`` flags are the ones seen before this call; every notification is
    marked read afterwards.
    """
    rows = db.scalars(
        select(Notification)
        .where(Notification.to_user_id == user.id)
        .options(selectinload(Notification.sender), selectinload(Notification.recipient))
        .order_by(Notification.id.asc())
    ).all()
    result = [notification_out(n) for n in rows]

    db.execute(
        update(Notification)
        .where(Notification.to_user_id == user.id, Notification.read.is_(False))
        .values(read=True)
    )
    db.commit()
    logger.debug("Listed %d notifications for user id=%s", len(result), user.id)
    return result


def clear_notifications(db: Session, user: Users) -> int:
    res = db.execute(delete(Notification).where(Notification.to_user_id == user.id))
    db.commit()
    logger.info("Deleted %s notifications for user id=%s", res.rowcount, user.id)
    return res.rowcount
