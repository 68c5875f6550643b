# trackproxy/domain/catalog/token_manager.py
import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from trackproxy.errors import UpstreamAuthError, UpstreamUnavailableError
from trackproxy.models.dto import TokenPayload
from trackproxy.observability.metrics import record_token_exchange, record_upstream_failure
from trackproxy.utils.cache import TokenCache

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = "https://accounts.spotify.com/api/token"


def _json_or_text(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class TokenManager:
    """Exchanges the Spotify client credentials for a bearer token and caches it."""

    def __init__(self, cache: TokenCache, client_id: str = "", client_secret: str = "",
                 session: Optional[requests.Session] = None,
                 token_url: str = DEFAULT_TOKEN_URL,
                 timeout: Optional[float] = 10.0):
        self.cache = cache
        self._client_id = client_id or ""
        self._client_secret = client_secret or ""
        self._session = session or requests.Session()
        self._token_url = token_url
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def get_access_token(self) -> str:
        """Return a fresh bearer token, exchanging credentials only on a cache miss."""
        token = self.cache.get()
        if token:
            return token
        return self._exchange()

    def _exchange(self) -> str:
        record_token_exchange()
        logger.debug("Requesting Spotify access token from %s", self._token_url)
        try:
            response = self._session.post(
                self._token_url,
                auth=(self._client_id, self._client_secret),
                data={"grant_type": "client_credentials"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            record_upstream_failure("token")
            logger.error("Spotify token request failed: %s", exc, exc_info=True)
            raise UpstreamUnavailableError(f"Spotify token request failed: {exc}") from exc

        data = _json_or_text(response)
        if not response.ok:
            record_upstream_failure("token")
            logger.error("[Spotify Token Error] status=%s payload=%s", response.status_code, data)
            reason = data.get("error") if isinstance(data, dict) else None
            raise UpstreamAuthError(
                f"Spotify token failed: {reason or response.status_code}",
                upstream_status=response.status_code,
                details=data,
            )

        try:
            payload = TokenPayload.model_validate(data)
        except ValidationError as exc:
            record_upstream_failure("token")
            logger.error("Spotify token payload malformed: %s", data)
            raise UpstreamAuthError(
                "Spotify token failed: malformed token payload",
                upstream_status=response.status_code,
                details=data,
            ) from exc

        expires_at = self.cache.now() + payload.expires_in
        self.cache.set(payload.access_token, expires_at)
        logger.info("Cached Spotify access token (expires in %ss)", payload.expires_in)
        return payload.access_token
