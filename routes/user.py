from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.db import get_db
from config.security import get_current_user
from model.user import Users
from schema.user import UserOut, UserUpdateIn, UserUpdateOut, MessageOut
from services import user_service
from src.projections import user_out
from src.storage_service import ImageHost, get_image_host

router = APIRouter()


@router.get("/profile/{username}", response_model=UserOut)
def get_profile(username: str, db: Session = Depends(get_db), _: Users = Depends(get_current_user)):
    """Public profile of a user, looked up by username."""
    return user_service.get_profile(db, username)


@router.get("/suggested", response_model=List[UserOut])
def suggested_profiles(db: Session = Depends(get_db), me: Users = Depends(get_current_user)):
    return user_service.suggest_profiles(db, me)


@router.post("/follow/{user_id}", response_model=MessageOut)
def follow_unfollow(user_id: str, db: Session = Depends(get_db), me: Users = Depends(get_current_user)):
    """Follow or unfollow a user."""
    return MessageOut(message=user_service.follow_unfollow(db, me, user_id))


@router.post("/update", response_model=UserUpdateOut)
def update_profile(
    payload: UserUpdateIn,
    db: Session = Depends(get_db),
    me: Users = Depends(get_current_user),
    image_host: ImageHost = Depends(get_image_host),
):
    user = user_service.update_profile(db, me, payload, image_host)
    return UserUpdateOut(message="Profile updated successfully", user=user_out(user))
