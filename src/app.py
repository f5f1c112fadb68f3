# src/app.py
import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from config.settings import CORS_ORIGINS, DEV_CREATE_SCHEMA, LOG_LEVEL
from config.db import engine
from model.base import Base
from model import load_all_models
from routes.auth import router as auth_router
from routes.user import router as user_router
from routes.social.routes import router as posts_router
from routes.notifications import router as notifications_router
from src.errors import AppError

load_all_models()

logger = logging.getLogger(__name__)

logging.basicConfig(level=LOG_LEVEL)


app = FastAPI(title="Social API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(user_router, prefix="/api/users", tags=["Users"])
app.include_router(posts_router)  # already has /api/posts prefix inside
app.include_router(notifications_router)  # already has /api/notifications prefix inside


# --- Exception handlers and security headers ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    level = logging.WARNING if 400 <= exc.status_code < 500 else logging.ERROR
    logger.log(level, "%s %s on %s %s: %s", type(exc).__name__, exc.status_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={
        "code": exc.code,
        "message": exc.message,
    })


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={
        "code": "validation_error",
        "message": "Invalid request",
        "errors": jsonable_encoder(exc.errors()),
    })


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    # 4xx/5xx raised intentionally in code
    level = logging.WARNING if 400 <= exc.status_code < 500 else logging.ERROR
    logger.log(level, "HTTPException %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={
        "code": "http_error",
        "message": exc.detail,
    })


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={
        "code": "internal_error",
        "message": "Internal Server Error",
    })


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    return response


@app.on_event("startup")
def _startup():
    # Optionally ensure schema in dev if explicitly enabled (prefer Alembic normally)
    if DEV_CREATE_SCHEMA:
        Base.metadata.create_all(engine)
        logger.info("DB metadata ensured via SQLAlchemy (dev mode).")
    else:
        logger.info("Skipping Base.metadata.create_all(); use Alembic migrations for schema.")
    logger.info("Social API starting…")


@app.get("/health")
def health():
    return {"ok": True}
