"""Pydantic models for the state apiary keeps on disk.

**Application secrets** -- the OAuth client registration a generated CLI
authenticates as, in the JSON layout the Google Cloud console downloads:
    :class:`ApplicationSecret`, :class:`ConsoleApplicationSecret`.

**Tokens** -- what the installed-application flow persists between runs:
    :class:`TokenInfo`, :class:`StoredToken`, :class:`TokenFile`.

Unlike the API schema types in :mod:`apiary.apis`, these models use the
snake_case member names of the OAuth documents verbatim.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


# --- Application secrets ---


class ApplicationSecret(BaseModel):
    """An OAuth2 client registration.

    Example::

        ApplicationSecret(
            client_id="1234.apps.googleusercontent.com",
            client_secret="abc",
        )
    """

    model_config = ConfigDict(extra="ignore")

    client_id: str = Field(default="", description="OAuth client identifier")
    client_secret: str = Field(default="", description="OAuth client secret")
    token_uri: str = Field(default=GOOGLE_TOKEN_URI, description="Token endpoint")
    auth_uri: str = Field(default=GOOGLE_AUTH_URI, description="Authorization endpoint")
    redirect_uris: list[str] = Field(default_factory=list)
    project_id: Optional[str] = None
    client_email: Optional[str] = None
    auth_provider_x509_cert_url: Optional[str] = None
    client_x509_cert_url: Optional[str] = None


class ConsoleApplicationSecret(BaseModel):
    """The file the console downloads: the secret nested under its client kind."""

    installed: Optional[ApplicationSecret] = None
    web: Optional[ApplicationSecret] = None

    def secret(self) -> Optional[ApplicationSecret]:
        """Return the installed-app secret, falling back to the web one."""
        return self.installed or self.web


# --- Tokens ---


class TokenInfo(BaseModel):
    """An access token and what is needed to renew it.

    Attributes:
        access_token: The bearer token.
        refresh_token: Long-lived token used to obtain new access tokens.
        expires_at: UTC expiry. ``None`` means unknown, treated as valid.
        token_type: Usually ``"Bearer"``.
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    token_type: str = "Bearer"

    def is_expired(self, margin: float = 0.0) -> bool:
        """Whether the token expires within *margin* seconds from now."""
        if self.expires_at is None:
            return False
        expires = self.expires_at
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) + timedelta(seconds=margin) >= expires


class StoredToken(BaseModel):
    """A token together with the exact scope set it was granted for."""

    scopes: list[str] = Field(description="Sorted scope list the token was granted for")
    token: TokenInfo


class TokenFile(BaseModel):
    """Top-level layout of a token store file."""

    tokens: list[StoredToken] = Field(default_factory=list)
