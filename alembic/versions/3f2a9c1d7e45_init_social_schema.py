"""init social schema

Revision ID: 3f2a9c1d7e45
Revises: 
Create Date: 2026-10-19 10:12:41.508223

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e45'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BIGINT = sa.BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql")


def upgrade() -> None:
    # users
    op.create_table(
        "users",
        sa.Column("id", BIGINT, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(50), nullable=False),
        sa.Column("username", sa.String(20), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("full_name", sa.String(120), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("link", sa.String(500), nullable=False, server_default=""),
        sa.Column("profile_picture", sa.String(500), nullable=False, server_default=""),
        sa.Column("cover_picture", sa.String(500), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_users_user_id", "users", ["user_id"], unique=True)

    # user_credentials (1:1 with users)
    op.create_table(
        "user_credentials",
        sa.Column("user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("last_password_change", sa.DateTime(), nullable=True),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )

    # followers (edge table, both directions are read from it)
    op.create_table(
        "followers",
        sa.Column("id", BIGINT, primary_key=True, autoincrement=True),
        sa.Column("follower_user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
                  comment="User who is following"),
        sa.Column("following_user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
                  comment="User being followed"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("follower_user_id", "following_user_id", name="uq_follower_following"),
        sa.CheckConstraint("follower_user_id != following_user_id", name="ck_no_self_follow"),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_followers_follower_user_id", "followers", ["follower_user_id"])
    op.create_index("ix_followers_following_user_id", "followers", ["following_user_id"])

    # posts
    op.create_table(
        "posts",
        sa.Column("id", BIGINT, primary_key=True, autoincrement=True),
        sa.Column("post_id", sa.String(50), nullable=False),
        sa.Column("user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_posts_post_id", "posts", ["post_id"], unique=True)
    op.create_index("idx_posts_user", "posts", ["user_id", "created_at"])
    op.create_index("idx_posts_created", "posts", ["created_at"])

    # post_likes (composite PK: one like per user per post)
    op.create_table(
        "post_likes",
        sa.Column("post_id", BIGINT, sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("idx_post_likes_user", "post_likes", ["user_id", "created_at"])

    # post_comments
    op.create_table(
        "post_comments",
        sa.Column("id", BIGINT, primary_key=True, autoincrement=True),
        sa.Column("post_id", BIGINT, sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("idx_post_comments_post", "post_comments", ["post_id", "id"])

    # notifications
    op.create_table(
        "notifications",
        sa.Column("id", BIGINT, primary_key=True, autoincrement=True),
        sa.Column("notification_id", sa.String(50), nullable=False),
        sa.Column("from_user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("to_user_id", BIGINT, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.Enum("follow", "like", "comment", name="notification_type"), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        mysql_engine="InnoDB",
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_notifications_notification_id", "notifications", ["notification_id"], unique=True)
    op.create_index("idx_notifications_to", "notifications", ["to_user_id", "id"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("post_comments")
    op.drop_table("post_likes")
    op.drop_table("posts")
    op.drop_table("followers")
    op.drop_table("user_credentials")
    op.drop_table("users")
