"""Homepage redirect and health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, HOMEPAGE_URL

router = APIRouter()


@router.get("/", include_in_schema=False)
async def homepage():
    """Send visitors to the project readme."""
    return RedirectResponse(HOMEPAGE_URL, status_code=302)


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint for monitoring.

    Returns 200 once the calendar client is authorized, 503 before that.
    """
    calendar_ready = getattr(request.app.state, "calendar", None) is not None
    timestamp = datetime.now(timezone.utc).isoformat()

    if calendar_ready:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            calendar_ready=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                calendar_ready=False,
                timestamp=timestamp,
                error="Calendar client is not authorized",
            ).model_dump(),
        )
