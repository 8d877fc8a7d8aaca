"""Now-playing resolution service.

Resolves the listening status from the live player endpoint, falls back to
recently-played when nothing is playing, and then to the last known track
when the API has nothing useful to say. Every returned value, including the
"unavailable" None, is cached for the configured TTL.
"""

from __future__ import annotations

import logging
import threading

from pydantic import ValidationError

from spotify_status.auth import AuthManager
from spotify_status.client import SpotifyClient
from spotify_status.config import Config
from spotify_status.models.auth import TokenStatus
from spotify_status.models.playback import (
    CacheStatus,
    CurrentlyPlaying,
    NowPlaying,
    RecentlyPlayed,
)
from spotify_status.utils.cache import SnapshotCache
from spotify_status.utils.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class NowPlayingService:
    """Service that resolves and caches the current listening status."""

    def __init__(self, client: SpotifyClient, cache_ttl: float = 10.0) -> None:
        self._client = client
        self._cache = SnapshotCache(ttl=cache_ttl)
        self._last_played: NowPlaying | None = None
        # Concurrent callers wait for the in-flight resolution and then hit the cache
        self._lock = threading.Lock()

    @property
    def last_played(self) -> NowPlaying | None:
        """Most recently resolved track, always with is_playing off."""
        return self._last_played

    def resolve(self, force_refresh: bool = False) -> NowPlaying | None:
        """Resolve the current listening status.

        Args:
            force_refresh: Skip the cache read. The result is still cached.

        Returns:
            A NowPlaying snapshot, or None when nothing can be shown.

        Raises:
            AuthError: If no access token could be obtained.
        """
        with self._lock:
            if not force_refresh:
                entry = self._cache.get()
                if entry is not None:
                    return entry.value
            return self._resolve_upstream()

    def cache_status(self) -> CacheStatus:
        entry = self._cache.peek()
        return CacheStatus(
            populated=entry is not None,
            fresh=self._cache.get() is not None,
            seconds_remaining=round(self._cache.seconds_remaining, 3),
            value=entry.value if entry is not None else None,
            last_played=self._last_played,
        )

    def clear(self) -> None:
        """Forget the cached snapshot and the last played track."""
        with self._lock:
            self._cache.clear()
            self._last_played = None

    def token_status(self) -> TokenStatus:
        return self._client.token_status()

    def close(self) -> None:
        self._client.close()

    def _resolve_upstream(self) -> NowPlaying | None:
        try:
            body = self._client.currently_playing()
        except UpstreamUnavailable as e:
            logger.warning(f"Live playback fetch failed: {e}")
            return self._fall_back()

        if body is None:
            logger.info("Nothing playing, checking recently played")
            return self._resolve_recently_played()

        try:
            playing = CurrentlyPlaying.model_validate(body)
        except ValidationError as e:
            logger.warning(f"Unexpected currently-playing payload: {e.error_count()} error(s)")
            return self._fall_back()

        return self._commit(NowPlaying.from_track(playing.item, playing.is_playing))

    def _resolve_recently_played(self) -> NowPlaying | None:
        try:
            history = RecentlyPlayed.model_validate(self._client.recently_played(limit=1))
        except UpstreamUnavailable as e:
            logger.warning(f"Recently played fetch failed: {e}")
            return self._fall_back()
        except ValidationError as e:
            logger.warning(f"Unexpected recently-played payload: {e.error_count()} error(s)")
            return self._fall_back()

        if not history.items:
            return self._fall_back()

        return self._commit(NowPlaying.from_track(history.items[0].track, is_playing=False))

    def _commit(self, snapshot: NowPlaying) -> NowPlaying:
        self._last_played = snapshot.paused()
        self._cache.put(snapshot)
        return snapshot

    def _fall_back(self) -> NowPlaying | None:
        """Serve the last known track, or None, and cache whichever it is."""
        value = self._last_played
        if value is None:
            logger.info("No last played track to fall back to, reporting unavailable")
        self._cache.put(value)
        return value


def build_service(config: Config, verbose: bool = False) -> NowPlayingService:
    """Wire an AuthManager, client and resolver from configuration."""
    auth = AuthManager(config)
    client = SpotifyClient(config, auth, verbose=verbose)
    return NowPlayingService(client, cache_ttl=config.cache_ttl)
