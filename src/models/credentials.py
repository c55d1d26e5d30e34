"""
Stored OAuth credential model.
"""

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, Field


class StoredCredential(BaseModel):
    """
    OAuth2 token pair persisted to the token file.

    The expiry is kept as epoch milliseconds under ``expiry_date``; files
    that spell it ``expiry`` are read as well.
    """

    access_token: str
    refresh_token: str | None = None
    scope: str = ""
    token_type: str = "Bearer"
    expiry_date: int | None = Field(
        default=None, validation_alias=AliasChoices("expiry_date", "expiry")
    )

    @classmethod
    def from_oauth_token(cls, token: dict) -> "StoredCredential":
        """Build from the token dict returned by an oauthlib code exchange."""
        scope = token.get("scope") or ""
        if isinstance(scope, (list, tuple)):
            scope = " ".join(scope)

        expires_at = token.get("expires_at")
        return cls(
            access_token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            scope=scope,
            token_type=token.get("token_type", "Bearer"),
            expiry_date=int(expires_at * 1000) if expires_at else None,
        )

    @property
    def scopes(self) -> list[str]:
        return self.scope.split()

    @property
    def expiry(self) -> datetime | None:
        """Expiry as a naive UTC datetime, the form google-auth compares against."""
        if self.expiry_date is None:
            return None
        return datetime.fromtimestamp(self.expiry_date / 1000, tz=timezone.utc).replace(
            tzinfo=None
        )
