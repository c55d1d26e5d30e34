"""
OAuth2 credential store.

Loads the cached token file, or runs the one-time authorization-code exchange
with the operator and caches the result.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable

from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from pydantic import ValidationError
from requests.exceptions import RequestException

from core.errors import CredentialError
from models.credentials import StoredCredential

logger = logging.getLogger(__name__)

# Receives the authorization URL, returns the code the operator pasted back
CodeProvider = Callable[[str], str]


class AuthState(str, Enum):
    NO_TOKEN = "no_token"
    TOKEN_FOUND = "token_found"
    AWAITING_USER_CODE = "awaiting_user_code"
    TOKEN_OBTAINED = "token_obtained"
    FAILED = "failed"


def prompt_for_code(auth_url: str) -> str:
    """Default code provider: show the URL on the terminal and read one line."""
    print(f"Authorize this app by visiting this url: {auth_url}")
    try:
        return input("Enter the code from that page here: ")
    except EOFError as e:
        # stdin closed or not a terminal
        raise CredentialError("No terminal available to enter the authorization code") from e


class CredentialStore:
    """Resolves the Stored Credential for the calendar client."""

    def __init__(
        self,
        token_path: Path,
        client_config: dict,
        scopes: list[str],
        redirect_uri: str,
        code_provider: CodeProvider = prompt_for_code,
    ):
        self.token_path = Path(token_path)
        self.client_config = client_config
        self.scopes = scopes
        self.redirect_uri = redirect_uri
        self.code_provider = code_provider
        self.state = AuthState.NO_TOKEN

    def load(self) -> StoredCredential | None:
        """
        Read the cached token file.

        Returns None when the file is missing or cannot be parsed. Expiry is
        not checked here.
        """
        if not self.token_path.exists():
            self.state = AuthState.NO_TOKEN
            return None

        try:
            credential = StoredCredential.model_validate_json(self.token_path.read_text())
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.token_path, e)
            self.state = AuthState.NO_TOKEN
            return None

        self.state = AuthState.TOKEN_FOUND
        logger.info("Loaded token from %s", self.token_path)
        return credential

    def acquire(self) -> StoredCredential:
        """
        Run the interactive authorization-code exchange.

        Blocks on the code provider. The token is written to disk only when
        the exchange succeeds.

        Raises:
            CredentialError: empty code, rejected code, or network failure
        """
        self.state = AuthState.AWAITING_USER_CODE
        flow = Flow.from_client_config(
            self.client_config, scopes=self.scopes, redirect_uri=self.redirect_uri
        )
        auth_url, _ = flow.authorization_url(access_type="offline")

        try:
            code = (self.code_provider(auth_url) or "").strip()
        except CredentialError:
            self.state = AuthState.FAILED
            raise

        if not code:
            self.state = AuthState.FAILED
            raise CredentialError("No authorization code entered")

        try:
            token = flow.fetch_token(code=code)
        except (OAuth2Error, RequestException, ValueError, Warning) as e:
            # oauthlib signals a changed scope set with a Warning
            self.state = AuthState.FAILED
            logger.error("Error retrieving access token: %s", e)
            raise CredentialError(f"Error retrieving access token: {e}") from e

        credential = StoredCredential.from_oauth_token(token)
        try:
            self.save(credential)
        except OSError as e:
            logger.error("Could not store token to %s: %s", self.token_path, e)

        self.state = AuthState.TOKEN_OBTAINED
        return credential

    def save(self, credential: StoredCredential) -> None:
        """Overwrite the token file with the given credential."""
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(credential.model_dump_json(exclude_none=True))
        logger.info("Token stored to %s", self.token_path)

    def resolve(self) -> StoredCredential:
        """Return the cached credential, acquiring one first if there is none."""
        credential = self.load()
        if credential is None:
            return self.acquire()

        self.state = AuthState.TOKEN_OBTAINED
        return credential
