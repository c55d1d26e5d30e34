"""
Data models for calendar events.

Event payloads themselves are plain dicts in the Google Calendar resource shape;
only what we hand back to callers gets a type here.
"""

from typing import TypedDict


class EventResult(TypedDict):
    """What the proxy returns after a successful provider call."""
    id: str | None
    htmlLink: str | None
    responseURL: str | None


class Attendee(TypedDict, total=False):
    """Attendee entry as stored on a Google Calendar event."""
    email: str
    responseStatus: str
    displayName: str
    optional: bool
