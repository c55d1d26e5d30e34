"""API Pydantic models."""

from .requests import EventCreateRequest, InvitationRequest, ResponseStatus
from .responses import ErrorCodes, ErrorResponse, EventResponse, HealthResponse

__all__ = [
    "HealthResponse",
    "EventResponse",
    "ErrorResponse",
    "ErrorCodes",
    "InvitationRequest",
    "EventCreateRequest",
    "ResponseStatus",
]
