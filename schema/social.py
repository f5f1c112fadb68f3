from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from schema.user import CamelModel, UserOut


# ------------------------------------------------------------
# Requests
# ------------------------------------------------------------
class PostCreate(CamelModel):
    text: Optional[str] = None
    # data URI / base64 payload to upload, or an already hosted http(s) URL
    image: Optional[str] = None


class CommentCreate(CamelModel):
    text: Optional[str] = None


# ------------------------------------------------------------
# Comments
# ------------------------------------------------------------
class CommentOut(CamelModel):
    id: int
    user: UserOut
    text: str
    created_at: datetime


class CommentPreviewOut(CamelModel):
    comments: List[CommentOut]
    total_comments: int
    has_more_comments: bool


# ------------------------------------------------------------
# Posts
# ------------------------------------------------------------
class PostOut(CamelModel):
    id: str  # posts.post_id (PST-xxx)
    user: UserOut
    text: Optional[str] = None
    image: Optional[str] = None
    likes: List[str] = []
    comments: List[CommentOut] = []
    total_comments: int = 0
    has_more_comments: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None


class PostEnvelope(CamelModel):
    success: bool = True
    data: PostOut


# ------------------------------------------------------------
# Pagination
# ------------------------------------------------------------
class PagePagination(CamelModel):
    page: int
    limit: int
    total: int
    has_more: bool


class SkipPagination(CamelModel):
    skip: int
    limit: int
    total: int
    has_more: bool


class PostPage(CamelModel):
    success: bool = True
    data: List[PostOut]
    pagination: PagePagination


class CommentPage(CamelModel):
    success: bool = True
    data: List[CommentOut]
    pagination: SkipPagination


class DeletedOut(CamelModel):
    success: bool = True
    message: str = Field(default="Post deleted successfully")


__all__ = [
    "PostCreate",
    "CommentCreate",
    "CommentOut",
    "CommentPreviewOut",
    "PostOut",
    "PostEnvelope",
    "PagePagination",
    "SkipPagination",
    "PostPage",
    "CommentPage",
    "DeletedOut",
]
