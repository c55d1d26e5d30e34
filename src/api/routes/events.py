"""Event forwarding endpoints."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_calendar
from api.models.requests import EventCreateRequest, InvitationRequest
from api.models.responses import ErrorCodes, EventResponse
from core.errors import ProviderError
from services.calendar import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter()


def provider_error(e: ProviderError) -> HTTPException:
    """Map a failed provider call to a 400 carrying the provider's message."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": str(e),
            "code": ErrorCodes.PROVIDER_ERROR,
            "details": [],
        },
    )


@router.post("/send/{event}", response_model=EventResponse)
async def send_invitation(
    event: str,
    body: InvitationRequest,
    calendar: CalendarService = Depends(get_calendar),
):
    """
    Invite a recipient to an existing event on the primary calendar.

    The response status defaults to needsAction when omitted.
    """
    if not event.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "event and recipient is required",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )

    response_status = body.response.value if body.response else None
    try:
        return await asyncio.to_thread(
            calendar.invite_recipient, event, body.recipient, response_status
        )
    except ProviderError as e:
        logger.warning("Invite to event %s failed: %s", event, e)
        raise provider_error(e)


@router.post("/create", response_model=EventResponse)
async def create_event(
    request: Request,
    _body: EventCreateRequest,
    calendar: CalendarService = Depends(get_calendar),
):
    """
    Create an event on the primary calendar.

    The body is validated against EventCreateRequest, then the JSON as
    received is forwarded.
    """
    event = await request.json()
    try:
        return await asyncio.to_thread(calendar.create_event, event)
    except ProviderError as e:
        logger.warning("Event creation failed: %s", e)
        raise provider_error(e)
