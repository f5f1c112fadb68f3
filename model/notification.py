# model/notification.py
"""
Notifications fanned out by follow and like actions.
"""
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from model.base import Base
from model.custom_types import MyBIGINT
from model.social.enum import NotificationType


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(MyBIGINT, primary_key=True, autoincrement=True)
    notification_id = Column(String(50), unique=True, index=True, nullable=False)
    from_user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    to_user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(
        SAEnum(NotificationType, name="notification_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_notifications_to", "to_user_id", "id"),
    )

    sender = relationship("Users", foreign_keys=[from_user_id])
    recipient = relationship("Users", foreign_keys=[to_user_id])

    def __repr__(self):
        return f"<Notification(id={self.id}, type={self.type}, from={self.from_user_id}, to={self.to_user_id})>"
