"""Bearer token cache with time-bounded expiry."""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float


class TokenStore:
    """
    Holds the provider access token until it expires.

    Share one store between clients to get a process-wide cache. Expiry is
    the only invalidation; two callers may refresh at the same time, which
    the token endpoint tolerates.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Optional[AccessToken] = None

    def get(self) -> Optional[str]:
        """Return the cached token, or None if absent or expired."""
        with self._lock:
            if self._token is None:
                return None
            if self._clock() >= self._token.expires_at:
                self._token = None
                return None
            return self._token.value

    def set(self, value: str, expires_in: float) -> None:
        with self._lock:
            self._token = AccessToken(value=value, expires_at=self._clock() + float(expires_in))

    def clear(self) -> None:
        with self._lock:
            self._token = None
