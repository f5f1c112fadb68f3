# model/social/enum.py
from enum import Enum


class NotificationType(str, Enum):
    follow = "follow"
    like = "like"
    # Kept for clients that already know the value; nothing emits it yet.
    comment = "comment"
