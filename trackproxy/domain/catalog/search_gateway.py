# trackproxy/domain/catalog/search_gateway.py
import logging
from types import MappingProxyType
from typing import Any, Optional

import requests
from pydantic import ValidationError

from trackproxy.errors import (
    BadRequestError,
    ConfigurationError,
    InternalError,
    UpstreamSearchError,
    UpstreamUnavailableError,
)
from trackproxy.models.dto import SearchResult, UpstreamSearchPayload
from trackproxy.models.track_mapping import map_tracks, tracks_from_payload
from trackproxy.observability.metrics import record_search_request, record_upstream_failure

from .token_manager import TokenManager

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://api.spotify.com/v1/search"
DEFAULT_LANGUAGE = "english"
DEFAULT_LIMIT = 24
MIN_LIMIT = 1
MAX_LIMIT = 50

LANGUAGE_HINTS = MappingProxyType({
    "hindi": "Hindi song",
    "english": "English song",
    "kannada": "Kannada song",
    "tamil": "Tamil song",
    "telugu": "Telugu song",
})


def build_query(query: str, language_hint: Optional[str]) -> str:
    """Append the phrase for ``language_hint`` to the trimmed query.

    Unknown or empty hints leave the query untouched.
    """
    hint = LANGUAGE_HINTS.get((language_hint or "").strip().lower(), "")
    parts = [part for part in ((query or "").strip(), hint) if part]
    return " ".join(parts)


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(int(limit), MIN_LIMIT), MAX_LIMIT)


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return "Spotify search failed"


class SearchGateway:
    """Forwards track searches to Spotify and reshapes the results for UI cards."""

    def __init__(self, token_manager: TokenManager,
                 session: Optional[requests.Session] = None,
                 search_url: str = DEFAULT_SEARCH_URL,
                 default_market: str = "IN",
                 timeout: Optional[float] = 10.0):
        self.token_manager = token_manager
        self._session = session or requests.Session()
        self._search_url = search_url
        self.default_market = default_market
        self._timeout = timeout

    def search(self, query: Optional[str], language_hint: Optional[str] = None,
               market: Optional[str] = None,
               limit: Optional[int] = None) -> SearchResult:
        if not self.token_manager.configured:
            logger.error("Search rejected: SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET is not configured")
            raise ConfigurationError()

        trimmed = (query or "").strip()
        if not trimmed:
            raise BadRequestError("Missing query parameter: q")

        lang = (language_hint or "").strip() or DEFAULT_LANGUAGE
        market = (market or "").strip() or self.default_market
        limit = clamp_limit(limit)

        normalized_query = build_query(trimmed, lang)
        token = self.token_manager.get_access_token()

        params = {
            "q": normalized_query,
            "type": "track",
            "market": market,
            "limit": str(limit),
        }
        record_search_request()
        try:
            response = self._session.get(
                self._search_url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            record_upstream_failure("search")
            logger.error("Spotify search request failed for %r: %s", normalized_query, exc, exc_info=True)
            raise UpstreamUnavailableError(f"Spotify search request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            record_upstream_failure("search")
            details = data if data is not None else response.text
            logger.error("[Spotify Search Error] status=%s payload=%s", response.status_code, details)
            raise UpstreamSearchError(
                _error_message(data),
                status_code=response.status_code,
                details=details,
            )

        try:
            payload = UpstreamSearchPayload.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected Spotify search payload: %s", exc)
            raise InternalError("Malformed search payload from Spotify") from exc

        results = map_tracks(tracks_from_payload(payload))
        logger.info("Spotify search %r (market=%s, limit=%s) returned %d tracks",
                    normalized_query, market, limit, len(results))
        return SearchResult(normalized_query=normalized_query, results=results)
