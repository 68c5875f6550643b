"""Error taxonomy shared by the catalog services and the HTTP layer."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ProxyError(Exception):
    """Base error carrying the HTTP status and the client-visible payload."""

    status_code = 500
    default_message = "Internal error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class BadRequestError(ProxyError):
    status_code = 400
    default_message = "Bad request"


class ConfigurationError(ProxyError):
    status_code = 500
    default_message = "Server missing Spotify credentials (.env)"


class UpstreamAuthError(ProxyError):
    """Token exchange with Spotify failed or returned an unusable payload."""

    status_code = 500
    default_message = "Spotify token failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        upstream_status: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message, details=details)
        self.upstream_status = upstream_status


class UpstreamSearchError(ProxyError):
    """Spotify search answered with a non-success status; status is mirrored."""

    default_message = "Spotify search failed"


class UpstreamUnavailableError(ProxyError):
    status_code = 503
    default_message = "Spotify is unreachable"


class InternalError(ProxyError):
    status_code = 500


__all__ = [
    "ProxyError",
    "BadRequestError",
    "ConfigurationError",
    "UpstreamAuthError",
    "UpstreamSearchError",
    "UpstreamUnavailableError",
    "InternalError",
]
