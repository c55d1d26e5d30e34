#!/usr/bin/env python3
"""
Authorize the Google Calendar client and cache the token.

Runs the same one-time authorization the server performs at startup, so the
token file can be prepared before deploying.

Usage:
    uv run python src/scripts/authorize.py [--force]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    GOOGLE_SERVICE_ACCOUNT,
    GOOGLE_SERVICE_REDIRECT_URI,
    GOOGLE_SERVICE_SCOPES,
    TOKEN_PATH,
    parse_client_config,
    parse_scopes,
)
from core.credentials import CredentialStore
from core.errors import ConfigError, CredentialError


def main():
    parser = argparse.ArgumentParser(
        description="Authorize Google Calendar access and store the token"
    )
    parser.add_argument(
        "--token-path",
        type=Path,
        default=TOKEN_PATH,
        help=f"Where to store the token (default: {TOKEN_PATH})",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-authorize even if a token file already exists",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        store = CredentialStore(
            token_path=args.token_path,
            client_config=parse_client_config(GOOGLE_SERVICE_ACCOUNT),
            scopes=parse_scopes(GOOGLE_SERVICE_SCOPES),
            redirect_uri=GOOGLE_SERVICE_REDIRECT_URI,
        )
        credential = store.acquire() if args.force else store.resolve()
    except (ConfigError, CredentialError) as e:
        print(f"\nError: {e}")
        sys.exit(1)

    print(f"\nAuthorized ({store.state.value}), scopes: {credential.scope or 'unknown'}")


if __name__ == "__main__":
    main()
