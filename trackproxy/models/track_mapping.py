#!/usr/bin/env python
"""
Spotify track -> SimplifiedTrack conversion utilities.

Fallback order is fixed: album images 0, 1, 2 for the artwork, and the
track's external Spotify URL before a URL built from the track id.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

from .dto import SimplifiedTrack, UpstreamSearchPayload, UpstreamTrack

SPOTIFY_TRACK_URL = "https://open.spotify.com/track/{track_id}"

# Only the first three album images are considered for the card artwork
MAX_IMAGE_CANDIDATES = 3


def pick_image_url(track: UpstreamTrack) -> str:
    album = track.album
    if album is None or not album.images:
        return ""
    for image in album.images[:MAX_IMAGE_CANDIDATES]:
        if image is not None and image.url:
            return image.url
    return ""


def join_artist_names(track: UpstreamTrack) -> str:
    if not track.artists:
        return ""
    names = [artist.name for artist in track.artists if artist is not None and artist.name]
    return ", ".join(names)


def canonical_url(track: UpstreamTrack) -> str:
    if track.external_urls is not None and track.external_urls.spotify:
        return track.external_urls.spotify
    return SPOTIFY_TRACK_URL.format(track_id=track.id or "")


def to_simplified_track(track: Union[UpstreamTrack, Mapping[str, Any]]) -> SimplifiedTrack:
    if not isinstance(track, UpstreamTrack):
        track = UpstreamTrack.model_validate(track)

    album_name = ""
    if track.album is not None and track.album.name:
        album_name = track.album.name

    return SimplifiedTrack(
        id=track.id,
        title=track.name,
        artists=join_artist_names(track),
        album=album_name,
        image=pick_image_url(track),
        url=canonical_url(track),
        duration_ms=track.duration_ms,
        explicit=bool(track.explicit),
        preview_url=track.preview_url or None,
    )


def tracks_from_payload(payload: UpstreamSearchPayload) -> List[UpstreamTrack]:
    if payload.tracks is None or not payload.tracks.items:
        return []
    return [item for item in payload.tracks.items if item is not None]


def map_tracks(tracks: Iterable[Optional[UpstreamTrack]]) -> List[SimplifiedTrack]:
    return [to_simplified_track(t) for t in tracks if t is not None]


__all__ = [
    "SPOTIFY_TRACK_URL",
    "pick_image_url",
    "join_artist_names",
    "canonical_url",
    "to_simplified_track",
    "tracks_from_payload",
    "map_tracks",
]
