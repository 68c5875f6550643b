"""Spotify track search proxy."""

__version__ = "1.0.0"
