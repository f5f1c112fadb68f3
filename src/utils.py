# src/utils.py
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import bcrypt
import jwt

from config.settings import JWT_SECRET, JWT_ALG, JWT_ISS, SESSION_TTL_DAYS

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,20}$")


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def is_valid_username(username: str) -> bool:
    return bool(username) and USERNAME_RE.match(username) is not None


def hash_password(pw: str) -> str:
    if not pw:
        raise ValueError("Password must not be empty")
    return bcrypt.hashpw(pw.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(pw: str, hashed: str) -> bool:
    if not pw or not hashed:
        return False
    try:
        return bcrypt.checkpw(pw.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Password verification failed due to malformed hash", exc_info=True)
        return False


def make_session_token(user_public_id: str, ttl: timedelta = None) -> str:
    """Issue the signed session token carried by the session cookie."""
    if not user_public_id:
        raise ValueError("user_public_id is required")
    issued_at = _now_utc()
    expires_at = issued_at + (ttl if ttl is not None else timedelta(days=SESSION_TTL_DAYS))
    payload: Dict[str, Any] = {
        "sub": user_public_id,
        "typ": "session",
        "iss": JWT_ISS,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_session_token(token: str) -> Dict[str, Any]:
    """Decode & validate a session token. Raises jwt exceptions on failure."""
    options = {"require": ["exp", "iat", "sub", "typ"], "verify_signature": True}
    claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], issuer=JWT_ISS, options=options)
    if claims.get("typ") != "session":
        raise jwt.InvalidTokenError("Unexpected token type")
    return claims
