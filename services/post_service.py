# services/post_service.py
"""
Content store: posts, comments and likes, plus the paginated listings.
"""
import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from model.followers import Follower
from model.social.enum import NotificationType
from model.social.models import Post, PostComment, PostLike
from model.user import Users
from schema.social import CommentPage, CommentPreviewOut, PostOut, PostPage
from services.notification_service import add_notification
from services.pagination import page_pagination, page_params, skip_pagination, skip_params
from src.errors import ForbiddenError, ValidationError
from src.id_generator import generate_public_id
from src.projections import COMMENT_PREVIEW_SIZE, comments_out, post_out
from src.route_helpers import commit_or_conflict, get_post_by_public_id, get_user_by_public_id, get_user_by_username
from src.storage_service import ImageHost, is_hosted_url

logger = logging.getLogger(__name__)

_POST_LOAD_OPTIONS = (
    selectinload(Post.user),
    selectinload(Post.comments).selectinload(PostComment.user),
    selectinload(Post.likes).selectinload(PostLike.user),
)


# --------------------------
# Posts
# --------------------------

def create_post(db: Session, owner: Users, text: Optional[str], image: Optional[str], image_host: ImageHost) -> PostOut:
    if not text and not image:
        raise ValidationError("Please provide text or image")
    if image and not is_hosted_url(image):
        image = image_host.upload(image)

    post = Post(
        post_id=generate_public_id("post"),
        user_id=owner.id,
        text=text or None,
        image=image or None,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post %s created by user id=%s", post.post_id, owner.id)
    return post_out(post)


def get_post(db: Session, post_id: str) -> PostOut:
    return post_out(get_post_by_public_id(db, post_id))


def delete_post(db: Session, requester: Users, post_id: str, image_host: ImageHost) -> None:
    post = get_post_by_public_id(db, post_id)
    if post.user_id != requester.id:
        logger.warning("User id=%s tried to delete post %s owned by user id=%s", requester.id, post_id, post.user_id)
        raise ForbiddenError("You are not authorized to delete this post")
    if post.image:
        # Best effort: a stale asset is not worth failing the delete for
        image_host.destroy(post.image)
    db.delete(post)
    db.commit()
    logger.info("Post %s deleted by user id=%s", post_id, requester.id)


# --------------------------
# Comments
# --------------------------

def comment_on_post(db: Session, user: Users, post_id: str, text: Optional[str]) -> CommentPreviewOut:
    if not text:
        raise ValidationError("Please provide text")
    post = get_post_by_public_id(db, post_id)

    db.add(PostComment(post_id=post.id, user_id=user.id, text=text))
    db.commit()
    db.refresh(post)

    total = len(post.comments)
    logger.info("User id=%s commented on post %s", user.id, post_id)
    return CommentPreviewOut(
        comments=comments_out(post.comments[:COMMENT_PREVIEW_SIZE]),
        total_comments=total,
        has_more_comments=total > COMMENT_PREVIEW_SIZE,
    )


def list_post_comments(db: Session, post_id: str, skip: Optional[int], limit: Optional[int]) -> CommentPage:
    post = get_post_by_public_id(db, post_id)
    skip, limit = skip_params(skip, limit)
    total = db.scalar(select(func.count(PostComment.id)).where(PostComment.post_id == post.id))
    comments = db.scalars(
        select(PostComment)
        .where(PostComment.post_id == post.id)
        .options(selectinload(PostComment.user))
        .order_by(PostComment.id.asc())
        .offset(skip)
        .limit(limit)
    ).all()
    return CommentPage(data=comments_out(comments), pagination=skip_pagination(total, skip, limit))


# --------------------------
# Likes
# --------------------------

def like_unlike(db: Session, user: Users, post_id: str) -> List[str]:
    """
    Toggle ``user``'s like on the post. A new like also notifies the post
    owner in the same commit. Returns the resulting liker ids.
    """
    post = get_post_by_public_id(db, post_id)
    like = db.get(PostLike, (post.id, user.id))
    if like is not None:
        db.delete(like)
        db.commit()
        logger.info("User id=%s unliked post %s", user.id, post_id)
    else:
        db.add(PostLike(post_id=post.id, user_id=user.id))
        add_notification(db, user, post.user, NotificationType.like)
        commit_or_conflict(db, "Post already liked")
        logger.info("User id=%s liked post %s", user.id, post_id)

    db.refresh(post)
    return [like.user.user_id for like in post.likes]


# --------------------------
# Listings
# --------------------------

def _paginate_posts(db: Session, where, page: Optional[int], limit: Optional[int]) -> PostPage:
    page, limit, skip = page_params(page, limit)

    stmt = select(Post).options(*_POST_LOAD_OPTIONS)
    count_stmt = select(func.count(Post.id))
    if where is not None:
        stmt = stmt.where(where)
        count_stmt = count_stmt.where(where)

    total = db.scalar(count_stmt)
    posts = db.scalars(
        stmt.order_by(Post.created_at.desc(), Post.id.desc()).offset(skip).limit(limit)
    ).all()
    return PostPage(
        data=[post_out(p) for p in posts],
        pagination=page_pagination(total, page, limit, skip, len(posts)),
    )


def list_all_posts(db: Session, page: Optional[int] = None, limit: Optional[int] = None) -> PostPage:
    return _paginate_posts(db, None, page, limit)


def list_user_posts(db: Session, username: str, page: Optional[int] = None, limit: Optional[int] = None) -> PostPage:
    owner = get_user_by_username(db, username)
    return _paginate_posts(db, Post.user_id == owner.id, page, limit)


def list_liked_posts(db: Session, user_id: str, page: Optional[int] = None, limit: Optional[int] = None) -> PostPage:
    user = get_user_by_public_id(db, user_id)
    liked = select(PostLike.post_id).where(PostLike.user_id == user.id)
    return _paginate_posts(db, Post.id.in_(liked), page, limit)


def list_following_posts(db: Session, user: Users, page: Optional[int] = None, limit: Optional[int] = None) -> PostPage:
    followed = select(Follower.following_user_id).where(Follower.follower_user_id == user.id)
    return _paginate_posts(db, Post.user_id.in_(followed), page, limit)
