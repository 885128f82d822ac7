"""
Health check endpoints for monitoring service status.
"""

from fastapi import APIRouter, status
from sqlalchemy import text
from ..dependencies import DBSessionDep

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy", "service": "Media Folders API"}


@router.get("/db", status_code=status.HTTP_200_OK)
async def health_check_database(db_session: DBSessionDep):
    """
    Check database connectivity and report how many folders are stored.
    """
    try:
        result = await db_session.execute(text("SELECT COUNT(*) FROM media_folders"))
        return {
            "status": "healthy",
            "service": "database",
            "dialect": db_session.bind.dialect.name,
            "folders": result.scalar(),
        }
    except Exception as e:
        return {"status": "unhealthy", "service": "database", "error": str(e)}
