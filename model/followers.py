# model/followers.py
"""
Followers model for tracking user-to-user following relationships.

Both sides of the graph are read from this one table: a user's ``following``
is every row where they are the follower, their ``followers`` every row where
they are being followed. A follow or unfollow is therefore a single row write.
"""

from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from model.base import Base
from model.custom_types import MyBIGINT


class Follower(Base):
    """
    Tracks following relationships between users.

    Example:
        - User A (id=1) follows User B (id=2)
          -> follower_user_id=1, following_user_id=2
    """
    __tablename__ = "followers"

    id = Column(MyBIGINT, primary_key=True, autoincrement=True)

    follower_user_id = Column(
        MyBIGINT,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who is following"
    )

    following_user_id = Column(
        MyBIGINT,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User being followed"
    )

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    follower = relationship("Users", foreign_keys=[follower_user_id])
    following = relationship("Users", foreign_keys=[following_user_id])

    __table_args__ = (
        # A user can only follow another user once
        UniqueConstraint(
            'follower_user_id',
            'following_user_id',
            name='uq_follower_following'
        ),
        CheckConstraint(
            'follower_user_id != following_user_id',
            name='ck_no_self_follow'
        ),
    )

    def __repr__(self):
        return f"<Follower(id={self.id}, follower={self.follower_user_id}, following={self.following_user_id})>"
