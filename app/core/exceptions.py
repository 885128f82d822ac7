"""
Folder service errors and their FastAPI exception handlers.

Every error here is raised before any write happens, so a failed
operation never leaves a partial change behind.
"""

import logging
from typing import Literal

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FolderServiceError(Exception):
    """Base error for folder hierarchy operations."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(FolderServiceError):
    """Missing or oversized name, or a referenced parent/creator that does not exist."""

    def __init__(self, message: str = "The given data was invalid."):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class NotFoundError(FolderServiceError):
    """The targeted folder does not exist."""

    def __init__(self, message: str = "Folder not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class CycleError(FolderServiceError):
    """A move would make a folder its own ancestor."""

    def __init__(
        self, message: str = "Cannot move folder into itself or its descendants."
    ):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY)


class ConflictError(FolderServiceError):
    """Delete attempted on a folder that still has children or media."""

    def __init__(self, reason: Literal["children", "media"], message: str | None = None):
        self.reason = reason
        if message is None:
            if reason == "children":
                message = (
                    "Cannot delete folder with subfolders. "
                    "Please delete or move subfolders first."
                )
            else:
                message = (
                    "Cannot delete folder with media items. "
                    "Please delete or move media first."
                )
        super().__init__(message, status.HTTP_409_CONFLICT)


class IntegrityError(FolderServiceError):
    """Stored parent links are corrupt (a cycle or a dangling reference)."""

    def __init__(self, message: str = "Folder hierarchy is corrupt."):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def folder_error_handler(
    request: Request, exc: FolderServiceError
) -> JSONResponse:
    """Render folder service errors as JSON."""
    content = {"detail": exc.message, "message": exc.message}
    if isinstance(exc, ConflictError):
        content["reason"] = exc.reason
    return JSONResponse(status_code=exc.status_code, content=content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
