"""Health check endpoint."""

from fastapi import APIRouter

from .. import __version__
from ..config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Report service status and the dialect used for unmarked task text."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": __version__,
        "environment": settings.environment,
        "default_dialect": settings.default_dialect.value,
    }
