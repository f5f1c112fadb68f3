# schema/auth.py
from __future__ import annotations
from typing import Optional
from pydantic import ConfigDict

from schema.user import CamelModel, UserOut


class SignupIn(CamelModel):
    # Presence is checked by the service so a missing field is a 400, not a 422
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "a@x.com",
                "password": "secret1",
                "fullName": "Alice A",
            }
        }
    )


class LoginIn(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginOut(CamelModel):
    message: str
    user: UserOut


__all__ = [
    "SignupIn",
    "LoginIn",
    "LoginOut",
]
