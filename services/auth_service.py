# services/auth_service.py
"""
Credential store: registration and password authentication.
"""
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from model.user import Users, UserCredential
from src.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from src.id_generator import generate_public_id
from src.route_helpers import commit_or_conflict
from src.utils import (
    MIN_PASSWORD_LENGTH,
    hash_password,
    is_valid_email,
    is_valid_username,
    verify_password,
)

logger = logging.getLogger(__name__)

USERNAME_RULE = "Username must be 3-20 characters and contain only letters, numbers, and underscores"
PASSWORD_RULE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"


def register(db: Session, username: str, email: str, password: str, full_name: str) -> Users:
    if not username or not email or not password or not full_name:
        raise ValidationError("All fields are required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not is_valid_username(username):
        raise ValidationError(USERNAME_RULE)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(PASSWORD_RULE)

    if db.scalar(select(Users.id).where(Users.username == username)) is not None:
        logger.warning("Username already in use: %s", username)
        raise ConflictError("Username already exists")
    if db.scalar(select(Users.id).where(Users.email == email)) is not None:
        logger.warning("Email already in use: %s", email)
        raise ConflictError("Email already exists")

    user = Users(
        user_id=generate_public_id("user"),
        username=username,
        email=email,
        full_name=full_name,
    )
    user.creds = UserCredential(
        password_hash=hash_password(password),
        last_password_change=datetime.utcnow(),
    )
    db.add(user)
    commit_or_conflict(db)
    db.refresh(user)
    logger.info("User created with id=%s, user_id=%s", user.id, user.user_id)
    return user


def authenticate(db: Session, username: str, password: str) -> Users:
    if not username or not password:
        raise ValidationError("All fields are required")
    user = db.scalar(select(Users).where(Users.username == username))
    if not user:
        logger.warning("Login attempt for unknown username=%s", username)
        raise NotFoundError("User not found")
    if not user.creds or not verify_password(password, user.creds.password_hash):
        logger.warning("Invalid password for username=%s", username)
        raise UnauthorizedError("Invalid password")
    logger.info("Login successful for user id=%s", user.id)
    return user
