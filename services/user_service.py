# services/user_service.py
"""
Profiles and the follow graph.
"""
import logging
import random
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from model.followers import Follower
from model.social.enum import NotificationType
from model.user import Users
from schema.user import UserOut, UserUpdateIn
from services.auth_service import PASSWORD_RULE, USERNAME_RULE
from services.notification_service import add_notification
from src.errors import ConflictError, ValidationError
from src.projections import user_out
from src.route_helpers import commit_or_conflict, get_user_by_public_id, get_user_by_username
from src.storage_service import ImageHost, is_hosted_url
from src.utils import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    is_valid_email,
    is_valid_username,
    verify_password,
)

logger = logging.getLogger(__name__)

SUGGESTION_SAMPLE_SIZE = 10
SUGGESTION_LIMIT = 4


def get_profile(db: Session, username: str) -> UserOut:
    return user_out(get_user_by_username(db, username))


def follow_unfollow(db: Session, actor: Users, target_user_id: str) -> str:
    """
    Toggle the edge actor -> target. Following also notifies the target.
    The edge and its notification are committed together.

    Returns the outcome message.
    """
    if target_user_id == actor.user_id:
        raise ValidationError("You cannot follow/unfollow yourself")
    target = get_user_by_public_id(db, target_user_id)

    edge = db.scalar(
        select(Follower).where(
            Follower.follower_user_id == actor.id,
            Follower.following_user_id == target.id,
        )
    )
    if edge is not None:
        db.delete(edge)
        db.commit()
        logger.info("User id=%s unfollowed user id=%s", actor.id, target.id)
        return "Unfollowed successfully"

    db.add(Follower(follower_user_id=actor.id, following_user_id=target.id))
    add_notification(db, actor, target, NotificationType.follow)
    commit_or_conflict(db, "You are already following this user")
    logger.info("User id=%s followed user id=%s", actor.id, target.id)
    return "Followed successfully"


def suggest_profiles(db: Session, user: Users) -> List[UserOut]:
    """
    Up to four users drawn uniformly at random from everyone else, minus the
    ones ``user`` already follows.
    """
    candidate_ids = db.scalars(select(Users.id).where(Users.id != user.id)).all()
    sample_ids = random.sample(candidate_ids, min(SUGGESTION_SAMPLE_SIZE, len(candidate_ids)))
    followed = {u.id for u in user.following}

    picked = [uid for uid in sample_ids if uid not in followed][:SUGGESTION_LIMIT]
    if not picked:
        return []
    by_id = {u.id: u for u in db.scalars(select(Users).where(Users.id.in_(picked))).all()}
    return [user_out(by_id[uid]) for uid in picked if uid in by_id]


def _replace_picture(image_host: ImageHost, current: str, payload: str) -> str:
    # The old asset only goes once the new one is stored
    new_url = payload if is_hosted_url(payload) else image_host.upload(payload)
    if current and current != new_url:
        image_host.destroy(current)
    return new_url


def update_profile(db: Session, user: Users, body: UserUpdateIn, image_host: ImageHost) -> Users:
    """
    Apply a partial profile update. Empty or missing fields keep their stored
    value; a password change needs both the current and the new password.
    """
    if body.username and body.username != user.username:
        if not is_valid_username(body.username):
            raise ValidationError(USERNAME_RULE)
        existing = db.scalar(select(Users).where(Users.username == body.username))
        if existing and existing.id != user.id:
            raise ConflictError("Username already exists")

    if bool(body.current_password) != bool(body.new_password):
        raise ValidationError("Please provide both current and new password")
    if body.current_password and body.new_password:
        if not verify_password(body.current_password, user.creds.password_hash):
            logger.warning("Rejected password change for user id=%s: wrong current password", user.id)
            raise ValidationError("Current password is incorrect")
        if len(body.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(PASSWORD_RULE)
        user.creds.password_hash = hash_password(body.new_password)
        user.creds.last_password_change = datetime.utcnow()

    if body.email and body.email != user.email:
        if not is_valid_email(body.email):
            raise ValidationError("Invalid email format")
        existing = db.scalar(select(Users).where(Users.email == body.email))
        if existing and existing.id != user.id:
            raise ConflictError("Email already exists")

    if body.profile_picture:
        user.profile_picture = _replace_picture(image_host, user.profile_picture, body.profile_picture)
    if body.cover_picture:
        user.cover_picture = _replace_picture(image_host, user.cover_picture, body.cover_picture)

    user.username = body.username or user.username
    user.full_name = body.full_name or user.full_name
    user.email = body.email or user.email
    user.bio = body.bio or user.bio
    user.link = body.link or user.link

    commit_or_conflict(db)
    db.refresh(user)
    logger.info("Profile updated for user id=%s", user.id)
    return user
