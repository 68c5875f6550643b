#!/usr/bin/env python
"""
Pydantic models for Spotify payloads and the simplified track card.

Upstream models mirror only the fields the proxy reads. Every field is
optional so a sparse Spotify object validates and the mapping layer decides
the fallbacks explicitly.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UpstreamImage(_Upstream):
    url: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


class UpstreamArtist(_Upstream):
    id: Optional[str] = None
    name: Optional[str] = None


class UpstreamAlbum(_Upstream):
    id: Optional[str] = None
    name: Optional[str] = None
    images: Optional[List[Optional[UpstreamImage]]] = None


class UpstreamExternalUrls(_Upstream):
    spotify: Optional[str] = None


class UpstreamTrack(_Upstream):
    id: Optional[str] = None
    name: Optional[str] = None
    artists: Optional[List[Optional[UpstreamArtist]]] = None
    album: Optional[UpstreamAlbum] = None
    external_urls: Optional[UpstreamExternalUrls] = None
    duration_ms: Optional[int] = None
    explicit: Optional[bool] = None
    preview_url: Optional[str] = None


class UpstreamTrackPage(_Upstream):
    # Spotify occasionally returns null entries inside items
    items: Optional[List[Optional[UpstreamTrack]]] = None
    total: Optional[int] = None


class UpstreamSearchPayload(_Upstream):
    tracks: Optional[UpstreamTrackPage] = None


class TokenPayload(_Upstream):
    access_token: str = Field(min_length=1)
    expires_in: int
    token_type: Optional[str] = None


class SimplifiedTrack(BaseModel):
    """UI-friendly projection of a Spotify track."""

    id: Optional[str] = None
    title: Optional[str] = None
    artists: str = ""
    album: str = ""
    image: str = ""
    url: str
    duration_ms: Optional[int] = None
    explicit: bool = False
    preview_url: Optional[str] = None


class SearchResult(BaseModel):
    normalized_query: str
    results: List[SimplifiedTrack]

    def to_response(self) -> dict:
        return {
            "query": self.normalized_query,
            "results": [track.model_dump() for track in self.results],
        }


__all__ = [
    "UpstreamImage",
    "UpstreamArtist",
    "UpstreamAlbum",
    "UpstreamExternalUrls",
    "UpstreamTrack",
    "UpstreamTrackPage",
    "UpstreamSearchPayload",
    "TokenPayload",
    "SimplifiedTrack",
    "SearchResult",
]
