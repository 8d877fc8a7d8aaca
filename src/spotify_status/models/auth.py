"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Response from the Spotify accounts token endpoint."""
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
    scope: str | None = None


class AccessToken(BaseModel):
    """A bearer token and the moment it stops being usable."""
    token: str
    expires_at: datetime

    def is_valid(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) < self.expires_at


class TokenStatus(BaseModel):
    """Current state of the cached access token."""
    has_token: bool
    is_expired: bool
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
