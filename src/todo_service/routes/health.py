"""Health check endpoint."""

from fastapi import APIRouter

from ..config import settings
from ..services.date_anchors import format_date
from ..services.task_parser import current_time

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Return service health status and the local date relative dates resolve against."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "timezone": settings.timezone,
        "today": format_date(current_time().date()),
    }
