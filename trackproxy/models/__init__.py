"""Payload schemas and mapping helpers."""

from .dto import SearchResult, SimplifiedTrack, TokenPayload, UpstreamSearchPayload, UpstreamTrack
from .track_mapping import map_tracks, to_simplified_track, tracks_from_payload

__all__ = [
    "SearchResult",
    "SimplifiedTrack",
    "TokenPayload",
    "UpstreamSearchPayload",
    "UpstreamTrack",
    "map_tracks",
    "to_simplified_track",
    "tracks_from_payload",
]
