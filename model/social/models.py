# model/social/models.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship

from model.base import Base
from model.custom_types import MyBIGINT


# ---------------------------------------------------------------------------
# Posts: owned by one user, text and/or hosted image
# ---------------------------------------------------------------------------
class Post(Base):
    __tablename__ = "posts"

    id = Column(MyBIGINT, primary_key=True, autoincrement=True)
    post_id = Column(String(50), unique=True, index=True, nullable=False)
    user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_posts_user", "user_id", "created_at"),
        Index("idx_posts_created", "created_at"),
    )

    user = relationship("Users", back_populates="posts")
    comments = relationship(
        "PostComment",
        back_populates="post",
        order_by="PostComment.id",
        cascade="all, delete-orphan",
    )
    likes = relationship(
        "PostLike",
        back_populates="post",
        order_by="PostLike.created_at",
        cascade="all, delete-orphan",
    )


# ---------------------------------------------------------------------------
# Likes: user → post. Composite PK prevents duplicates; a user's liked posts
# are read from the same rows.
# ---------------------------------------------------------------------------
class PostLike(Base):
    __tablename__ = "post_likes"

    post_id = Column(MyBIGINT, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_post_likes_user", "user_id", "created_at"),
    )

    post = relationship("Post", back_populates="likes")
    user = relationship("Users")


# ---------------------------------------------------------------------------
# Comments: append-only, insertion order is chronological order
# ---------------------------------------------------------------------------
class PostComment(Base):
    __tablename__ = "post_comments"

    id = Column(MyBIGINT, primary_key=True, autoincrement=True)
    post_id = Column(MyBIGINT, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_post_comments_post", "post_id", "id"),
    )

    post = relationship("Post", back_populates="comments")
    user = relationship("Users")
