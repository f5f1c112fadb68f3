# src/projections.py
"""
Explicit per-entity projections from ORM rows to response schemas.

Credentials live on ``UserCredential`` and are never read here, so every
projection is credential-free by construction.
"""
from typing import List

from model.user import Users
from model.social.models import Post, PostComment
from model.notification import Notification
from schema.user import UserOut
from schema.social import CommentOut, PostOut
from schema.notification import NotificationOut, NotificationSenderOut

COMMENT_PREVIEW_SIZE = 3


def user_out(user: Users) -> UserOut:
    return UserOut(
        id=user.user_id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        bio=user.bio or "",
        link=user.link or "",
        profile_picture=user.profile_picture or "",
        cover_picture=user.cover_picture or "",
        followers=[u.user_id for u in user.followers],
        following=[u.user_id for u in user.following],
        liked_posts=[p.post_id for p in user.liked_posts],
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def comment_out(comment: PostComment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        user=user_out(comment.user),
        text=comment.text,
        created_at=comment.created_at,
    )


def comments_out(comments: List[PostComment]) -> List[CommentOut]:
    return [comment_out(c) for c in comments]


def post_out(post: Post) -> PostOut:
    """Listing view: the first three comments plus the total count."""
    total = len(post.comments)
    return PostOut(
        id=post.post_id,
        user=user_out(post.user),
        text=post.text,
        image=post.image,
        likes=[like.user.user_id for like in post.likes],
        comments=comments_out(post.comments[:COMMENT_PREVIEW_SIZE]),
        total_comments=total,
        has_more_comments=total > COMMENT_PREVIEW_SIZE,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def notification_out(notification: Notification) -> NotificationOut:
    sender = notification.sender
    return NotificationOut(
        id=notification.notification_id,
        sender=NotificationSenderOut(
            id=sender.user_id,
            username=sender.username,
            profile_picture=sender.profile_picture or "",
        ),
        to=notification.recipient.user_id,
        type=notification.type,
        read=notification.read,
        created_at=notification.created_at,
    )
