"""
Pytest configuration and shared fixtures.
"""

import copy
import json
import sys
from pathlib import Path

import httplib2
import pytest
from fastapi.testclient import TestClient
from googleapiclient.errors import HttpError

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from api.main import create_app  # noqa: E402
from services.calendar import CalendarService  # noqa: E402

EVENTS_URI = "https://www.googleapis.com/calendar/v3/calendars/primary/events"


def http_error(status: int, message: str) -> HttpError:
    """HttpError shaped like a Google API error response."""
    content = json.dumps({"error": {"code": status, "message": message}}).encode()
    return HttpError(httplib2.Response({"status": status}), content, uri=EVENTS_URI)


class FakeRequest:
    """Stands in for googleapiclient.http.HttpRequest."""

    def __init__(self, uri: str, run):
        self.uri = uri
        self._run = run

    def execute(self):
        return self._run()


class FakeEvents:
    def __init__(self, resource: "FakeCalendarResource"):
        self.resource = resource

    def get(self, calendarId, eventId):
        def run():
            self.resource.calls.append(("get", {"calendarId": calendarId, "eventId": eventId}))
            self.resource.raise_if_failing()
            if eventId not in self.resource.stored:
                raise http_error(404, "Not Found")
            return copy.deepcopy(self.resource.stored[eventId])

        return FakeRequest(f"{EVENTS_URI}/{eventId}?alt=json", run)

    def patch(self, calendarId, eventId, body):
        def run():
            self.resource.calls.append(
                ("patch", {"calendarId": calendarId, "eventId": eventId, "body": body})
            )
            self.resource.raise_if_failing()
            updated = {**self.resource.stored[eventId], **body}
            self.resource.stored[eventId] = updated
            return {**updated, "htmlLink": f"https://calendar.google.com/event?eid={eventId}"}

        return FakeRequest(f"{EVENTS_URI}/{eventId}?alt=json", run)

    def insert(self, calendarId, body):
        def run():
            self.resource.calls.append(("insert", {"calendarId": calendarId, "body": body}))
            self.resource.raise_if_failing()
            event_id = f"new{len(self.resource.stored) + 1}"
            self.resource.stored[event_id] = {**body, "id": event_id}
            return {
                **body,
                "id": event_id,
                "htmlLink": f"https://calendar.google.com/event?eid={event_id}",
            }

        return FakeRequest(f"{EVENTS_URI}?alt=json", run)


class FakeCalendarResource:
    """In-memory Calendar v3 resource that records every executed call."""

    def __init__(self, stored: dict | None = None):
        self.stored = stored if stored is not None else {}
        self.calls: list[tuple[str, dict]] = []
        self.failure: Exception | None = None

    def events(self):
        return FakeEvents(self)

    def raise_if_failing(self):
        if self.failure is not None:
            raise self.failure


@pytest.fixture
def sample_event():
    """Existing event on the primary calendar."""
    return {
        "id": "evt123",
        "summary": "Planning",
        "start": {"dateTime": "2025-05-28T09:00:00-07:00", "timeZone": "America/Los_Angeles"},
        "end": {"dateTime": "2025-05-28T10:00:00-07:00", "timeZone": "America/Los_Angeles"},
        "attendees": [{"email": "x@y.com"}],
    }


@pytest.fixture
def create_payload():
    """Valid body for POST /create."""
    return {
        "summary": "Google I/O 2015",
        "location": "800 Howard St., San Francisco, CA 94103",
        "description": "A chance to hear more about Google's developer products.",
        "start": {"dateTime": "2015-05-28T09:00:00-07:00", "timeZone": "America/Los_Angeles"},
        "end": {"dateTime": "2015-05-28T17:00:00-07:00", "timeZone": "America/Los_Angeles"},
        "attendees": [{"email": "lpage@b.com"}, {"email": "sbrin@b.com"}],
        "reminders": {"useDefault": True},
    }


@pytest.fixture
def calendar_resource(sample_event):
    return FakeCalendarResource({sample_event["id"]: sample_event})


@pytest.fixture
def calendar_service(calendar_resource):
    return CalendarService(calendar_resource)


@pytest.fixture
def client(calendar_service):
    """Test client with an authorized calendar already in place."""
    return TestClient(create_app(calendar=calendar_service, use_whitelist=False))
