from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises as camelCase; accepts camelCase or snake_case on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserOut(CamelModel):
    """Public profile. Never carries credentials."""
    id: str  # users.user_id (e.g., USR-1699564234-A7K9M2)
    username: str
    email: str
    full_name: str
    bio: str = ""
    link: str = ""
    profile_picture: str = ""
    cover_picture: str = ""
    followers: List[str] = []
    following: List[str] = []
    liked_posts: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdateIn(CamelModel):
    # None / "" leave the stored value untouched
    username: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    link: Optional[str] = None
    profile_picture: Optional[str] = None
    cover_picture: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "bio": "Coffee and climbing",
                "currentPassword": "secret1",
                "newPassword": "secret2",
            }
        }
    )


class UserUpdateOut(CamelModel):
    message: str
    user: UserOut


class MessageOut(CamelModel):
    message: str
