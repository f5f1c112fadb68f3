from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from config.db import get_db
from config.security import get_current_user
from model.user import Users
from schema.social import (
    CommentCreate,
    CommentPage,
    CommentPreviewOut,
    DeletedOut,
    PostCreate,
    PostEnvelope,
    PostPage,
)
from services import post_service
from src.storage_service import ImageHost, get_image_host

router = APIRouter(
    prefix="/api/posts",
    tags=["Posts"],
)

# --------------------------
# Posts
# --------------------------

@router.post("/create", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
    image_host: ImageHost = Depends(get_image_host),
):
    """Create a new post."""
    post = post_service.create_post(db, current_user, payload.text, payload.image, image_host)
    return PostEnvelope(data=post)


@router.get("/all", response_model=PostPage)
def list_all_posts(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    _: Users = Depends(get_current_user),
):
    """Every post, newest first."""
    return post_service.list_all_posts(db, page, limit)


@router.get("/following", response_model=PostPage)
def list_following_posts(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    """Posts from the users the caller follows."""
    return post_service.list_following_posts(db, current_user, page, limit)


@router.get("/likes/{user_id}", response_model=PostPage)
def list_liked_posts(
    user_id: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    _: Users = Depends(get_current_user),
):
    return post_service.list_liked_posts(db, user_id, page, limit)


@router.get("/user/{username}", response_model=PostPage)
def list_user_posts(
    username: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    _: Users = Depends(get_current_user),
):
    return post_service.list_user_posts(db, username, page, limit)


@router.get("/{post_id}", response_model=PostEnvelope)
def get_post(post_id: str, db: Session = Depends(get_db), _: Users = Depends(get_current_user)):
    """Retrieve a single post by ID."""
    return PostEnvelope(data=post_service.get_post(db, post_id))


@router.delete("/{post_id}", response_model=DeletedOut)
def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
    image_host: ImageHost = Depends(get_image_host),
):
    """Delete a post. Only its owner may do so."""
    post_service.delete_post(db, current_user, post_id, image_host)
    return DeletedOut()


# --------------------------
# Comments
# --------------------------

@router.post("/comment/{post_id}", response_model=CommentPreviewOut, status_code=status.HTTP_201_CREATED)
def comment_on_post(
    post_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Users = Depends(get_current_user),
):
    """Comment on a post; returns the first comments and the total."""
    return post_service.comment_on_post(db, current_user, post_id, payload.text)


@router.get("/comments/{post_id}", response_model=CommentPage)
def list_post_comments(
    post_id: str,
    skip: Optional[int] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    _: Users = Depends(get_current_user),
):
    """List a post's comments in the order they were written."""
    return post_service.list_post_comments(db, post_id, skip, limit)


# --------------------------
# Likes
# --------------------------

@router.post("/like/{post_id}", response_model=List[str])
def like_unlike_post(post_id: str, db: Session = Depends(get_db), current_user: Users = Depends(get_current_user)):
    """Like or unlike a post; returns the ids of everyone who now likes it."""
    return post_service.like_unlike(db, current_user, post_id)
