import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth import auth_backend, fastapi_users
from app.auth.schemas import UserCreate, UserRead, UserUpdate
from .core.config import settings
from .core.exceptions import (
    FolderServiceError,
    folder_error_handler,
    generic_exception_handler,
)
from .routers import folders, health

logging.basicConfig(
    stream=sys.stdout,
    level=logging.DEBUG if settings.debug_logs else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


app = FastAPI(title="Media Folders API")

app.add_exception_handler(FolderServiceError, folder_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(folders.router)
app.include_router(health.router)

app.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["auth"],
)
app.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["auth"],
)
app.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate),
    prefix="/users",
    tags=["users"],
)


@app.get("/")
async def root():
    return {"service": "Media Folders API", "docs": "/docs"}
