from datetime import datetime

from pydantic import Field

from model.social.enum import NotificationType
from schema.user import CamelModel


class NotificationSenderOut(CamelModel):
    id: str
    username: str
    profile_picture: str = ""


class NotificationOut(CamelModel):
    id: str  # notifications.notification_id (NTF-xxx)
    sender: NotificationSenderOut = Field(alias="from")
    to: str
    type: NotificationType
    read: bool
    created_at: datetime
