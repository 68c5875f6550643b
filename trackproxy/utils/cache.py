"""In-memory cache for the Spotify client-credential access token."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

# Seconds subtracted from the reported expiry so a token never dies mid-request
SAFETY_MARGIN_SECONDS = 10.0


@dataclass(frozen=True)
class CachedToken:
    value: str
    expires_at: float


class TokenCache:
    """Holds a single bearer token and hands it out while it is still fresh.

    Reads and writes are unsynchronized. Two callers racing past an expired
    token will both refresh it, and the last write wins.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        safety_margin: float = SAFETY_MARGIN_SECONDS,
    ) -> None:
        if safety_margin < 0:
            raise ValueError("safety_margin must not be negative")
        self._clock = clock
        self.safety_margin = safety_margin
        self._entry: Optional[CachedToken] = None

    def now(self) -> float:
        return self._clock()

    def get(self) -> Optional[str]:
        entry = self._entry
        if entry is None:
            return None
        if self.now() < entry.expires_at - self.safety_margin:
            return entry.value
        return None

    def set(self, value: str, expires_at: float) -> None:
        self._entry = CachedToken(value=value, expires_at=expires_at)

    @property
    def has_token(self) -> bool:
        """True once any token was stored, fresh or not."""
        return self._entry is not None

    def clear(self) -> None:
        self._entry = None


__all__ = ["TokenCache", "CachedToken", "SAFETY_MARGIN_SECONDS"]
