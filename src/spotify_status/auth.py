"""OAuth2 authentication for the Spotify Web API.

Exchanges the stored refresh token for short-lived bearer tokens and caches
them until shortly before they expire.
"""

from __future__ import annotations

import base64
import logging
import threading
from datetime import datetime, timedelta

import httpx

from spotify_status.config import Config
from spotify_status.models.auth import AccessToken, TokenResponse, TokenStatus
from spotify_status.utils.errors import AuthError

logger = logging.getLogger(__name__)


# Subtracted from expires_in so a token never expires mid-request
EXPIRY_BUFFER = timedelta(seconds=60)


class AuthManager:
    """Manages the OAuth2 access token for the Spotify Web API."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._token: AccessToken | None = None
        self._lock = threading.Lock()
        self._http = httpx.Client(timeout=config.settings.http_timeout)

    def get_token(self, force_refresh: bool = False) -> AccessToken:
        """Get a valid access token, refreshing if needed.

        Args:
            force_refresh: Force a token exchange even if the cached token is valid.

        Returns:
            The cached or freshly exchanged AccessToken.

        Raises:
            AuthError: If the refresh-token exchange fails.
        """
        with self._lock:
            token = self._token
            if not force_refresh and token is not None and token.is_valid():
                return token

            self._token = self._refresh_token()
            return self._token

    def get_access_token(self, force_refresh: bool = False) -> str:
        """Get a valid bearer token string."""
        return self.get_token(force_refresh).token

    def get_status(self) -> TokenStatus:
        """Get the current token status."""
        if self._token is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = datetime.now()
        expires_at = self._token.expires_at
        is_expired = not self._token.is_valid(now)
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = int((expires_at - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            expires_at=expires_at,
            seconds_remaining=seconds_remaining,
        )

    def _basic_auth_header(self) -> str:
        settings = self._config.settings
        credentials = f"{settings.client_id}:{settings.client_secret}"
        return "Basic " + base64.b64encode(credentials.encode()).decode()

    def _refresh_token(self) -> AccessToken:
        """Exchange the refresh token for a new access token."""
        settings = self._config.settings
        missing = [
            name for name in ("client_id", "client_secret", "refresh_token")
            if not getattr(settings, name)
        ]
        if missing:
            raise AuthError(
                f"Missing Spotify credentials: {', '.join(missing)}. Check your .env file."
            )

        logger.info("Refreshing Spotify access token")
        try:
            response = self._http.post(
                self._config.endpoints.token_endpoint,
                headers={"Authorization": self._basic_auth_header()},
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": settings.refresh_token,
                },
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Token refresh failed: {e}") from e

        if response.status_code != 200:
            error_detail = response.text
            try:
                error_json = response.json()
                error_detail = error_json.get("error_description", error_json.get("error", response.text))
            except ValueError:
                pass
            raise AuthError(
                f"Token refresh failed (HTTP {response.status_code}): {error_detail}"
            )

        try:
            token_data = TokenResponse(**response.json())
        except (TypeError, ValueError) as e:
            raise AuthError(f"Token refresh failed: unexpected response body ({e})") from e

        expires_at = datetime.now() + timedelta(seconds=token_data.expires_in) - EXPIRY_BUFFER
        return AccessToken(token=token_data.access_token, expires_at=expires_at)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
