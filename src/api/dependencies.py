"""FastAPI dependencies for shared resources."""

from fastapi import HTTPException, Request, status

from api.models.responses import ErrorCodes
from services.calendar import CalendarService


def get_calendar(request: Request) -> CalendarService:
    """
    Return the calendar service built at startup.

    Raises:
        HTTPException: 503 while no authorized client exists
    """
    calendar = getattr(request.app.state, "calendar", None)
    if calendar is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "Calendar client is not authorized yet",
                "code": ErrorCodes.SERVICE_UNAVAILABLE,
                "details": [],
            },
        )
    return calendar
