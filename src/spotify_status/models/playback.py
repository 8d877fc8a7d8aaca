"""Playback data models.

Upstream payloads from the player endpoints are validated here and
normalized into ``NowPlaying`` snapshots.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Artist(BaseModel):
    name: str


class Track(BaseModel):
    name: str
    artists: list[Artist] = Field(min_length=1)

    @property
    def primary_artist(self) -> str:
        return self.artists[0].name


class CurrentlyPlaying(BaseModel):
    """Body of GET /v1/me/player/currently-playing (200)."""
    item: Track
    is_playing: bool = False


class PlayHistory(BaseModel):
    track: Track


class RecentlyPlayed(BaseModel):
    """Body of GET /v1/me/player/recently-played."""
    items: list[PlayHistory] = Field(default_factory=list)


class NowPlaying(BaseModel):
    """Normalized listening status served to the display layer."""
    title: str
    artist: str
    is_playing: bool = Field(default=False, alias="isPlaying")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_track(cls, track: Track, is_playing: bool) -> NowPlaying:
        return cls(title=track.name, artist=track.primary_artist, is_playing=is_playing)

    def paused(self) -> NowPlaying:
        """Copy of this snapshot with is_playing forced off."""
        return self.model_copy(update={"is_playing": False})

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class CacheStatus(BaseModel):
    """Diagnostic view of the resolver's cached state."""
    populated: bool
    fresh: bool
    seconds_remaining: float = 0.0
    value: NowPlaying | None = None
    last_played: NowPlaying | None = None
