"""
Event forwarding to Google Calendar.
"""

import logging

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import Error as GoogleApiClientError
from googleapiclient.errors import HttpError

from core.config import (
    DEFAULT_RESPONSE_STATUS,
    GOOGLE_HTTP_TIMEOUT,
    GOOGLE_SERVICE_ACCOUNT,
    GOOGLE_SERVICE_REDIRECT_URI,
    GOOGLE_SERVICE_SCOPES,
    PRIMARY_CALENDAR,
    TOKEN_PATH,
    parse_client_config,
    parse_scopes,
)
from core.credentials import CodeProvider, CredentialStore, prompt_for_code
from core.errors import ProviderError
from core.google_client import build_calendar_resource, build_credentials
from models.events import Attendee, EventResult

logger = logging.getLogger(__name__)


class CalendarService:
    """
    Authenticated calendar client shared by all request handlers.

    Holds no per-request state; the calls below block on the network and are
    meant to be run off the event loop.
    """

    def __init__(self, resource, calendar_id: str = PRIMARY_CALENDAR):
        self._resource = resource
        self.calendar_id = calendar_id

    def invite_recipient(
        self, event_id: str, recipient: str, response_status: str | None = None
    ) -> EventResult:
        """
        Add a recipient to an existing event.

        The new attendee is appended to the event's list as-is: an attendee
        with the same email is not merged or replaced.
        """
        event, _ = self._execute(
            self._resource.events().get(calendarId=self.calendar_id, eventId=event_id)
        )

        attendees: list[Attendee] = list(event.get("attendees") or [])
        attendees.append(
            {"email": recipient, "responseStatus": response_status or DEFAULT_RESPONSE_STATUS}
        )

        updated, uri = self._execute(
            self._resource.events().patch(
                calendarId=self.calendar_id,
                eventId=event_id,
                body={**event, "attendees": attendees},
            )
        )
        logger.info("Invited %s to event %s", recipient, event_id)
        return to_event_result(updated, uri)

    def create_event(self, event: dict) -> EventResult:
        """Insert the event payload unchanged."""
        created, uri = self._execute(
            self._resource.events().insert(calendarId=self.calendar_id, body=event)
        )
        logger.info("Created event %s", created.get("id"))
        return to_event_result(created, uri)

    @staticmethod
    def _execute(request) -> tuple[dict, str | None]:
        """Run a prepared API request, returning the body and the request URI."""
        try:
            result = request.execute()
        except HttpError as e:
            raise ProviderError(e.reason or str(e)) from e
        except (GoogleApiClientError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            raise ProviderError(str(e)) from e

        # Non-JSON bodies (proxies, captive portals) come back as plain strings
        if not isinstance(result, dict):
            raise ProviderError(
                f"Unexpected response from Google Calendar: {str(result)[:200]}"
            )
        return result, getattr(request, "uri", None)


def to_event_result(data: dict | None, uri: str | None) -> EventResult:
    data = data or {}
    return {
        "id": data.get("id"),
        "htmlLink": data.get("htmlLink"),
        "responseURL": uri,
    }


def connect_calendar(code_provider: CodeProvider = prompt_for_code) -> CalendarService:
    """
    Resolve credentials from configuration and build the calendar service.

    Runs the interactive authorization when no token is cached.

    Raises:
        ConfigError: GOOGLE_SERVICE_ACCOUNT or scopes are missing/invalid
        CredentialError: the authorization code exchange failed
    """
    client_config = parse_client_config(GOOGLE_SERVICE_ACCOUNT)
    store = CredentialStore(
        token_path=TOKEN_PATH,
        client_config=client_config,
        scopes=parse_scopes(GOOGLE_SERVICE_SCOPES),
        redirect_uri=GOOGLE_SERVICE_REDIRECT_URI,
        code_provider=code_provider,
    )
    credential = store.resolve()

    credentials = build_credentials(credential, client_config)
    return CalendarService(build_calendar_resource(credentials, GOOGLE_HTTP_TIMEOUT))
