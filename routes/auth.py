# routes/auth.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from config.db import get_db
from config.security import clear_session_cookie, get_current_user, set_session_cookie
from model.user import Users
from schema.auth import SignupIn, LoginIn, LoginOut
from schema.user import UserOut, MessageOut
from services import auth_service
from src.projections import user_out

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Registration successful, session cookie set"},
        400: {"description": "Bad Request - Missing/invalid field or username/email already exists"},
        500: {"description": "Internal Server Error"},
    },
)
def signup(body: SignupIn, response: Response, db: Session = Depends(get_db)):
    logger.info("Signup endpoint called with username=%s", body.username)
    user = auth_service.register(db, body.username, body.email, body.password, body.full_name)
    set_session_cookie(response, user)
    return user_out(user)


@router.post(
    "/login",
    response_model=LoginOut,
    responses={
        200: {"description": "Login successful, session cookie set"},
        400: {"description": "Bad Request - Missing field"},
        401: {"description": "Unauthorized - Invalid password"},
        404: {"description": "Not Found - Unknown username"},
    },
)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    logger.info("Login attempt for username=%s", body.username)
    user = auth_service.authenticate(db, body.username, body.password)
    set_session_cookie(response, user)
    return LoginOut(message="Login successful", user=user_out(user))


@router.post("/logout", response_model=MessageOut)
def logout(response: Response):
    clear_session_cookie(response)
    return MessageOut(message="Logout successful")


@router.get("/me", response_model=UserOut)
def get_me(current_user: Users = Depends(get_current_user)):
    """
    Returns the currently authenticated user.
    Requires a valid session cookie.
    """
    return user_out(current_user)
