# src/route_helpers.py
"""
Helper utilities for services to work with public IDs.
Provides consistent lookup and error handling across all operations.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from model.user import Users
from model.social.models import Post
from src.errors import ConflictError, NotFoundError
from src.id_generator import validate_public_id

logger = logging.getLogger(__name__)


# =============================================================================
# Lookups
# =============================================================================

def get_user_by_public_id(db: Session, user_id: str) -> Users:
    """
    Get user by user_id (e.g., USR-1699564234-A7K9M2).

    Raises:
        NotFoundError: User not found
    """
    if not validate_public_id(user_id, "user"):
        raise NotFoundError("User not found")
    user = db.scalar(select(Users).where(Users.user_id == user_id))
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: Session, username: str) -> Users:
    user = db.scalar(select(Users).where(Users.username == username))
    if not user:
        raise NotFoundError("User not found")
    return user


def get_post_by_public_id(db: Session, post_id: str) -> Post:
    """
    Get post by post_id (e.g., PST-1699564234-A7K9M2).

    Raises:
        NotFoundError: Post not found
    """
    if not validate_public_id(post_id, "post"):
        raise NotFoundError("Post not found")
    post = db.scalar(select(Post).where(Post.post_id == post_id))
    if not post:
        raise NotFoundError("Post not found")
    return post


# =============================================================================
# Unit of work
# =============================================================================

def commit_or_conflict(db: Session, message: Optional[str] = None) -> None:
    """
    Commit the session; a unique/primary-key violation raced past the
    existence checks becomes a ConflictError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity error on commit: %s", e.orig)
        raise ConflictError(message or _conflict_message(e))


def _conflict_message(e: IntegrityError) -> str:
    detail = str(e.orig).lower()
    if "username" in detail:
        return "Username already exists"
    if "email" in detail:
        return "Email already exists"
    return "Resource already exists"
