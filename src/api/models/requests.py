"""Pydantic request models for API endpoints."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ResponseStatus(str, Enum):
    """Attendee response status accepted by Google Calendar."""

    NEEDS_ACTION = "needsAction"
    DECLINED = "declined"
    TENTATIVE = "tentative"
    ACCEPTED = "accepted"


class InvitationRequest(BaseModel):
    """Body of POST /send/{event}."""

    recipient: str = Field(min_length=1)
    # None means "not given"; the service falls back to needsAction
    response: ResponseStatus | None = None


class EventDateTime(BaseModel):
    model_config = ConfigDict(extra="allow")

    dateTime: str = Field(min_length=1)
    timeZone: str | None = None


class EventAttendee(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str = Field(pattern=EMAIL_PATTERN)
    responseStatus: ResponseStatus | None = None


class ReminderOverride(BaseModel):
    model_config = ConfigDict(extra="allow")

    method: str = Field(pattern=r"^(email|popup)$")
    minutes: int = Field(ge=0)


class EventReminders(BaseModel):
    model_config = ConfigDict(extra="allow")

    useDefault: bool
    overrides: list[ReminderOverride] | None = None


class EventCreateRequest(BaseModel):
    """
    Body of POST /create.

    Only checks the shape; the request JSON itself is what gets forwarded,
    so fields beyond these reach Google Calendar untouched.
    """

    model_config = ConfigDict(extra="allow")

    summary: str = Field(min_length=1)
    location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    start: EventDateTime
    end: EventDateTime
    attendees: list[EventAttendee] | None = None
    reminders: EventReminders | None = None
