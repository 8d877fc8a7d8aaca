"""API client for the Spotify Web API player endpoints.

Handles bearer header injection and turns transport failures and error
statuses into UpstreamUnavailable. There is no retry logic: the resolver's
live → recently-played fallback is the only second attempt.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from spotify_status.auth import AuthManager
from spotify_status.config import Config
from spotify_status.models.auth import TokenStatus
from spotify_status.utils.errors import MalformedResponse, UpstreamUnavailable

logger = logging.getLogger(__name__)


CURRENTLY_PLAYING_PATH = "/v1/me/player/currently-playing"
RECENTLY_PLAYED_PATH = "/v1/me/player/recently-played"


class SpotifyClient:
    """HTTP client for the Spotify Web API with auth handling."""

    def __init__(self, config: Config, auth: AuthManager, verbose: bool = False) -> None:
        self._config = config
        self._auth = auth
        self._verbose = verbose
        self._http = httpx.Client(timeout=config.settings.http_timeout)

    def get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Make an authenticated GET request.

        The token is fetched before the request, so an AuthError propagates
        unchanged to the caller.

        Args:
            path: API path (e.g. "/v1/me/player/currently-playing").
            params: Query parameters.

        Returns:
            The httpx.Response for any status below 400.

        Raises:
            AuthError: If no access token could be obtained.
            UpstreamUnavailable: On network failure or an error status.
        """
        url = self._config.api_url(path)
        headers = {"Authorization": f"Bearer {self._auth.get_access_token()}"}

        if self._verbose:
            logger.info(f"GET {url} params={params}")

        try:
            response = self._http.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Request to {path} failed: {e}") from e

        if self._verbose:
            logger.info(f"Response: {response.status_code}")

        if response.status_code >= 400:
            error_detail = response.text
            try:
                error_json = response.json()
                error_detail = error_json.get("error", {}).get("message", response.text)
            except (AttributeError, ValueError):
                pass
            raise UpstreamUnavailable(
                f"API error (HTTP {response.status_code}) from {path}: {error_detail}"
            )

        return response

    def currently_playing(self) -> dict[str, Any] | None:
        """Fetch the current playback state.

        Returns:
            The decoded JSON body, or None when nothing is playing (204).
        """
        response = self.get(CURRENTLY_PLAYING_PATH)
        if response.status_code == 204:
            return None
        return _decode(response, CURRENTLY_PLAYING_PATH)

    def recently_played(self, limit: int = 1) -> dict[str, Any]:
        """Fetch the most recently played tracks, newest first."""
        response = self.get(RECENTLY_PLAYED_PATH, params={"limit": limit})
        return _decode(response, RECENTLY_PLAYED_PATH)

    def token_status(self) -> TokenStatus:
        """Status of the token this client authenticates with."""
        return self._auth.get_status()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
        self._auth.close()


def _decode(response: httpx.Response, path: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponse(f"Non-JSON body from {path}") from e
    if not isinstance(data, dict):
        raise MalformedResponse(f"Unexpected body from {path}: {data!r}")
    return data
