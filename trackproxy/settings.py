#!/usr/bin/env python
"""
Centralized configuration schema for the proxy.

Merges defaults from config.Config (or a Flask app config mapping) into a
validated settings object consumed by the catalog services.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Config


class ProxySettings(BaseModel):
    """Settings needed to talk to Spotify on behalf of the browser."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    # Upstream endpoints
    token_url: str = "https://accounts.spotify.com/api/token"
    search_url: str = "https://api.spotify.com/v1/search"

    default_market: str = "IN"
    timeout_seconds: float = Field(default=10.0, gt=0)
    cors_allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("spotify_client_id", "spotify_client_secret", mode="before")
    @classmethod
    def _strip_credentials(cls, value: Optional[object]) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("default_market", mode="before")
    @classmethod
    def _normalize_market(cls, value: Optional[object]) -> str:
        text = str(value or "").strip().upper()
        return text or "IN"

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Optional[object]) -> List[str]:
        if value is None:
            tokens: List[str] = []
        elif isinstance(value, str):
            tokens = [token.strip() for token in value.split(",")]
        else:
            tokens = [str(token).strip() for token in value]
        return [token for token in tokens if token] or ["*"]

    @property
    def credentials_configured(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)


def _read(source: Any, key: str, default: Any = None) -> Any:
    if isinstance(source, Mapping):
        return source.get(key, default)
    return getattr(source, key, default)


def load_proxy_settings(source: Any = None) -> ProxySettings:
    """Build settings from a Flask config mapping or the Config class."""
    source = Config if source is None else source
    return ProxySettings(
        spotify_client_id=_read(source, "SPOTIFY_CLIENT_ID"),
        spotify_client_secret=_read(source, "SPOTIFY_CLIENT_SECRET"),
        token_url=_read(source, "SPOTIFY_TOKEN_URL", Config.SPOTIFY_TOKEN_URL),
        search_url=_read(source, "SPOTIFY_SEARCH_URL", Config.SPOTIFY_SEARCH_URL),
        default_market=_read(source, "SPOTIFY_MARKET", Config.SPOTIFY_MARKET),
        timeout_seconds=_read(source, "UPSTREAM_TIMEOUT_SECONDS", Config.UPSTREAM_TIMEOUT_SECONDS),
        cors_allowed_origins=_read(source, "CORS_ALLOWED_ORIGINS", Config.CORS_ALLOWED_ORIGINS),
    )


__all__ = ["ProxySettings", "load_proxy_settings"]
