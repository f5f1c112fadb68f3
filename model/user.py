# model/user.py
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from model.base import Base
from model.custom_types import MyBIGINT


class Users(Base):
    __tablename__ = "users"

    id = Column(MyBIGINT, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    username = Column(String(20), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(120), nullable=False)
    bio = Column(Text, nullable=False, default="")
    link = Column(String(500), nullable=False, default="")
    profile_picture = Column(String(500), nullable=False, default="")
    cover_picture = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    creds = relationship("UserCredential", uselist=False, back_populates="user", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    # Read-only views over the edge and like tables; writes go through Follower / PostLike rows.
    following = relationship(
        "Users",
        secondary="followers",
        primaryjoin="Users.id == Follower.follower_user_id",
        secondaryjoin="Users.id == Follower.following_user_id",
        order_by="Follower.id",
        viewonly=True,
    )
    followers = relationship(
        "Users",
        secondary="followers",
        primaryjoin="Users.id == Follower.following_user_id",
        secondaryjoin="Users.id == Follower.follower_user_id",
        order_by="Follower.id",
        viewonly=True,
    )
    liked_posts = relationship(
        "Post",
        secondary="post_likes",
        order_by="PostLike.created_at",
        viewonly=True,
    )

    def __repr__(self):
        return f"<Users(id={self.id}, user_id={self.user_id}, username={self.username})>"


class UserCredential(Base):
    __tablename__ = "user_credentials"

    user_id = Column(MyBIGINT, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    password_hash = Column(String(255), nullable=False)
    last_password_change = Column(DateTime)

    user = relationship("Users", back_populates="creds")
