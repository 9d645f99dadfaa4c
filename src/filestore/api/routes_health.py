"""Health check endpoint for the Filestore connector."""

from fastapi import APIRouter

from filestore.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Return service status, name and version."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
    }
