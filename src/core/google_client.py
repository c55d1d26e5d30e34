"""
Google Calendar client setup.
"""

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

from core.config import client_section
from models.credentials import StoredCredential


def build_credentials(credential: StoredCredential, client_config: dict) -> Credentials:
    """
    Turn the stored token pair into google-auth credentials.

    Carrying the refresh token and client secret lets google-auth refresh an
    expired access token on the next call.
    """
    section = client_section(client_config)
    return Credentials(
        token=credential.access_token,
        refresh_token=credential.refresh_token,
        token_uri=section["token_uri"],
        client_id=section["client_id"],
        client_secret=section["client_secret"],
        scopes=credential.scopes or None,
        expiry=credential.expiry,
    )


def build_calendar_resource(credentials: Credentials, timeout: float | None = None):
    """Build the Calendar v3 resource. timeout=None leaves provider calls unbounded."""
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
    return build("calendar", "v3", http=http, cache_discovery=False)
