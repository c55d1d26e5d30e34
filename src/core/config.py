"""
Configuration constants and environment setup.
"""

import json
import os
from pathlib import Path

from dotenv import load_dotenv

from core.errors import ConfigError

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
TOKEN_PATH = Path(os.environ.get("GOOGLE_TOKEN_PATH", PROJECT_ROOT / "token.json"))

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("APP_HOST", "0.0.0.0")
# PORT is set by most hosting platforms and wins over APP_PORT
API_PORT = int(os.environ.get("PORT") or os.environ.get("APP_PORT", "3001"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
HOMEPAGE_URL = os.environ.get(
    "HOMEPAGE_URL", "https://github.com/hrz8/opencalendar#readme"
)

# =============================================================================
# CORS
# =============================================================================

USE_WHITELIST = os.environ.get("USE_WHITELIST", "false").lower() == "true"
WHITELIST_ORIGIN = os.environ.get("WHITELIST_ORIGIN", "")

# =============================================================================
# GOOGLE CALENDAR
# =============================================================================

GOOGLE_SERVICE_ACCOUNT = os.environ.get("GOOGLE_SERVICE_ACCOUNT", "")
GOOGLE_SERVICE_SCOPES = os.environ.get("GOOGLE_SERVICE_SCOPES", "calendar.events")
GOOGLE_SERVICE_REDIRECT_URI = os.environ.get(
    "GOOGLE_SERVICE_REDIRECT_URI", "urn:ietf:wg:oauth:2.0:oob"
)
# Seconds per provider call; unset means calls are unbounded
_http_timeout = os.environ.get("GOOGLE_HTTP_TIMEOUT", "")
GOOGLE_HTTP_TIMEOUT = float(_http_timeout) if _http_timeout else None

GOOGLE_SCOPE_PREFIX = "https://www.googleapis.com/auth/"
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

PRIMARY_CALENDAR = "primary"

# =============================================================================
# VALIDATION CODES
# =============================================================================

DEFAULT_RESPONSE_STATUS = "needsAction"


def parse_origins(raw: str) -> list[str]:
    """Split a comma-separated origin list, dropping blanks."""
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def parse_scopes(raw: str) -> list[str]:
    """
    Expand comma-separated scope names into full scope URLs.

    Example: "calendar.events,calendar.readonly" ->
    ["https://www.googleapis.com/auth/calendar.events",
     "https://www.googleapis.com/auth/calendar.readonly"]
    """
    scopes = []
    for name in raw.split(","):
        name = name.strip()
        if not name:
            continue
        scopes.append(name if name.startswith("https://") else GOOGLE_SCOPE_PREFIX + name)
    if not scopes:
        raise ConfigError("GOOGLE_SERVICE_SCOPES must name at least one scope")
    return scopes


def parse_client_config(raw: str) -> dict:
    """
    Decode the OAuth client secret JSON downloaded from the Google console.

    Accepts either the "installed" (desktop) or "web" section and returns a
    client config in the shape google-auth-oauthlib expects.

    Raises:
        ConfigError: if the value is missing, not JSON, or lacks client id/secret
    """
    if not raw:
        raise ConfigError("GOOGLE_SERVICE_ACCOUNT is required")
    try:
        secret = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT is not valid JSON: {e}") from e

    if not isinstance(secret, dict):
        raise ConfigError("GOOGLE_SERVICE_ACCOUNT must be a JSON object")

    client_type = "installed" if "installed" in secret else "web"
    section = secret.get(client_type)
    if not isinstance(section, dict):
        raise ConfigError(
            "GOOGLE_SERVICE_ACCOUNT must contain an 'installed' or 'web' section"
        )

    missing = [key for key in ("client_id", "client_secret") if not section.get(key)]
    if missing:
        raise ConfigError(f"GOOGLE_SERVICE_ACCOUNT is missing {', '.join(missing)}")

    return {
        client_type: {
            **section,
            "auth_uri": section.get("auth_uri", GOOGLE_AUTH_URI),
            "token_uri": section.get("token_uri", GOOGLE_TOKEN_URI),
        }
    }


def client_section(client_config: dict) -> dict:
    """Return the inner 'installed' or 'web' section of a client config."""
    return client_config.get("installed") or client_config["web"]
