"""Configuration management for spotify-status.

Loads credentials from .env and API endpoints from config/spotify.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


DEFAULT_TOKEN_ENDPOINT = "https://accounts.spotify.com/api/token"
DEFAULT_API_BASE = "https://api.spotify.com"


class Endpoints(BaseModel):
    """Spotify endpoints used by the token manager and the resolver."""
    token_endpoint: str = DEFAULT_TOKEN_ENDPOINT
    api_base: str = DEFAULT_API_BASE


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    client_id: str = Field(description="Spotify OAuth client ID")
    client_secret: str = Field(description="Spotify OAuth client secret")
    refresh_token: str = Field(description="Long-lived OAuth refresh token")
    cache_ttl_ms: int = Field(default=10000, ge=0, description="Now-playing cache TTL in milliseconds")
    http_timeout: float = Field(default=10.0, gt=0, description="Timeout for outbound HTTP calls in seconds")
    host: str = Field(default="127.0.0.1", description="Bind address for the web server")
    port: int = Field(default=5000, description="Port for the web server")


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    endpoints: Endpoints = Field(default_factory=Endpoints)

    @property
    def cache_ttl(self) -> float:
        """Now-playing cache TTL in seconds."""
        return self.settings.cache_ttl_ms / 1000

    def api_url(self, path: str) -> str:
        """Join an API path onto the configured base URL."""
        return self.endpoints.api_base.rstrip("/") + path


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "spotify.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_endpoints(project_root: Path) -> Endpoints:
    """Load endpoint overrides from spotify.yaml, falling back to the public API."""
    endpoints_path = project_root / "config" / "spotify.yaml"
    if not endpoints_path.exists():
        return Endpoints()

    with open(endpoints_path) as f:
        data = yaml.safe_load(f) or {}

    return Endpoints(**data.get("endpoints", {}))


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Supports both SPOTIFY_* and the legacy NEXT_PUBLIC_SPOTIFY_* names.
    """
    return Settings(
        client_id=_env("SPOTIFY_CLIENT_ID", "NEXT_PUBLIC_SPOTIFY_CLIENT_ID"),
        client_secret=_env("SPOTIFY_CLIENT_SECRET", "NEXT_PUBLIC_SPOTIFY_CLIENT_SECRET"),
        refresh_token=_env("SPOTIFY_REFRESH_TOKEN", "NEXT_PUBLIC_SPOTIFY_REFRESH_TOKEN"),
        cache_ttl_ms=_env("SPOTIFY_NOW_PLAYING_CACHE_TTL", default="10000"),
        http_timeout=_env("SPOTIFY_HTTP_TIMEOUT", default="10"),
        host=_env("SPOTIFY_STATUS_HOST", default="127.0.0.1"),
        port=_env("SPOTIFY_STATUS_PORT", default="5000"),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    # Load .env from project root if it exists
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    endpoints = _load_endpoints(project_root)

    return Config(settings=settings, endpoints=endpoints)
