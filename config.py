#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # Server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = _get_int('PORT', 8080)

    # Spotify API (client-credential flow; the secret never leaves the server)
    SPOTIFY_CLIENT_ID = os.getenv('SPOTIFY_CLIENT_ID', '')
    SPOTIFY_CLIENT_SECRET = os.getenv('SPOTIFY_CLIENT_SECRET', '')
    SPOTIFY_MARKET = os.getenv('SPOTIFY_MARKET') or 'IN'
    SPOTIFY_TOKEN_URL = os.getenv('SPOTIFY_TOKEN_URL', 'https://accounts.spotify.com/api/token')
    SPOTIFY_SEARCH_URL = os.getenv('SPOTIFY_SEARCH_URL', 'https://api.spotify.com/v1/search')

    # Applies to both the token exchange and the search call
    UPSTREAM_TIMEOUT_SECONDS = _get_float('UPSTREAM_TIMEOUT_SECONDS', 10.0)

    # Browser origins allowed to call /api/*
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', '*')

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', True)
    LOG_DIR = os.getenv('LOG_DIR') or os.path.join(basedir, 'logs')
