"""Catalog domain services (token lifecycle, track search)."""

from .token_manager import TokenManager
from .search_gateway import SearchGateway, build_query, clamp_limit, LANGUAGE_HINTS

__all__ = ["TokenManager", "SearchGateway", "build_query", "clamp_limit", "LANGUAGE_HINTS"]
