"""
config.security
---------------
Session cookie handling for FastAPI routes.

This module defines:
- set_session_cookie() / clear_session_cookie()  → issue or expire the `jwt` cookie
- get_current_user()  → requires a valid session cookie, returns the user
"""

import logging
from typing import Optional

import jwt
from fastapi import Depends, Request, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from config import settings
from config.db import get_db
from model.user import Users
from src.errors import NotFoundError, UnauthorizedError
from src.utils import decode_session_token, make_session_token

logger = logging.getLogger(__name__)

SESSION_MAX_AGE = settings.SESSION_TTL_DAYS * 24 * 60 * 60  # seconds


# ---------------------------------------------------------------------------
# COOKIE HELPERS
# ---------------------------------------------------------------------------
def set_session_cookie(response: Response, user: Users) -> str:
    token = make_session_token(user.user_id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE,
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure(),
    )
    return token


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="strict",
        secure=settings.cookie_secure(),
    )


# ---------------------------------------------------------------------------
# TOKEN → USER
# ---------------------------------------------------------------------------
def verify_session_token(token: Optional[str]) -> str:
    """
    Decode the session token and return the subject (user public id).
    Raise UnauthorizedError for any token problem.
    """
    if not token:
        raise UnauthorizedError("Unauthorized - No token provided")
    try:
        claims = decode_session_token(token)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Unauthorized - Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Session token rejected: %s", e)
        raise UnauthorizedError("Unauthorized - Invalid token")
    return claims["sub"]


# ---------------------------------------------------------------------------
# DEPENDENCIES
# ---------------------------------------------------------------------------
def get_current_user(request: Request, db: Session = Depends(get_db)) -> Users:
    """Require a valid session cookie and return the user it names."""
    user_id = verify_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
    user = db.scalar(select(Users).where(Users.user_id == user_id))
    if not user:
        raise NotFoundError("User not found")
    return user
