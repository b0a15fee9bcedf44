"""
Login rate limiting: a fixed-window attempt counter per caller fingerprint.

The counter lives behind RateLimitStore so a shared backend can replace the
in-memory store. InMemoryRateLimitStore is process-local and never evicts keys
on its own; it is only suitable for a single-instance deployment.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from fastapi import Request

from storefront.core.config import settings

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


class RateLimitStore(Protocol):
    """Counter storage for rate limiting."""

    def increment(self, key: str) -> int:
        """Count one attempt for key and return the attempts in the current window."""
        ...

    def reset(self, key: str) -> None:
        """Forget all attempts for key."""
        ...


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimitStore:
    """Fixed-window counters in a dict guarded by a lock."""

    def __init__(self, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def increment(self, key: str) -> int:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                window = _Window(count=0, reset_at=now + self.window_seconds)
                self._windows[key] = window
            window.count += 1
            return window.count

    def reset(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def __len__(self) -> int:
        return len(self._windows)


class LoginRateLimiter:
    """Allows max_attempts login attempts per fingerprint per window."""

    def __init__(self, store: RateLimitStore, max_attempts: int):
        self.store = store
        self.max_attempts = max_attempts

    def hit(self, key: str) -> bool:
        """Record an attempt; False when this attempt is over the limit."""
        allowed = self.store.increment(key) <= self.max_attempts
        if not allowed:
            logger.warning("Login rate limit exceeded for fingerprint=%s", key)
        return allowed

    def reset(self, key: str) -> None:
        self.store.reset(key)


def client_fingerprint(request: Request) -> str:
    """Network address (first X-Forwarded-For hop, X-Real-IP, or peer) joined with the User-Agent."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() if forwarded else ""
    if not ip:
        ip = request.headers.get("x-real-ip", "").strip()
    if not ip and request.client is not None:
        ip = request.client.host
    user_agent = request.headers.get("user-agent") or UNKNOWN
    return f"{ip or UNKNOWN}-{user_agent}"


@lru_cache
def get_login_rate_limiter() -> LoginRateLimiter:
    """Dependency: the process-wide login limiter (override in tests or for a shared store)."""
    store = InMemoryRateLimitStore(window_seconds=settings.LOGIN_RATE_LIMIT_WINDOW_SEC)
    return LoginRateLimiter(store, max_attempts=settings.LOGIN_RATE_LIMIT_ATTEMPTS)
