"""
Request helpers: client identification, IP hashing and rate limiting.
"""

import hashlib
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request

logger = logging.getLogger(__name__)


def hash_ip(ip: str, salt: str) -> str:
    """Salted SHA-256 of a client IP, so raw addresses are never stored."""
    return hashlib.sha256(f"{ip}{salt}".encode("utf-8")).hexdigest()


def get_client_ip(request: Request) -> str:
    """
    Best-effort client IP.

    Looks at X-Forwarded-For (first hop), X-Real-IP and Remote-Addr headers
    before falling back to the socket peer address.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip") or request.headers.get("remote-addr")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: float


class RateLimiter:
    """
    In-memory fixed-window rate limiter.

    Counts requests per key inside a window that starts with the key's first
    request. State lives in the process, so limits are per worker.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length
        clock: Time source returning seconds, ``time.monotonic`` by default
        cleanup_interval: Expired windows are purged at most this often
    """

    def __init__(self, max_requests: int = 5, window_seconds: float = 15 * 60,
                 clock: Optional[Callable[[], float]] = None,
                 cleanup_interval: float = 30 * 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.cleanup_interval = cleanup_interval
        self._clock = clock or time.monotonic
        self._last_cleanup = self._clock()
        self._records: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str, max_requests: Optional[int] = None) -> RateLimitResult:
        """Count one request for ``key`` and report whether it is allowed."""
        limit = self.max_requests if max_requests is None else max_requests
        now = self._clock()
        if now - self._last_cleanup >= self.cleanup_interval:
            self._last_cleanup = now
            self.cleanup()

        with self._lock:
            record = self._records.get(key)

            if record is None or now > record[1]:
                reset_at = now + self.window_seconds
                self._records[key] = (1, reset_at)
                return RateLimitResult(True, limit - 1, reset_at)

            count, reset_at = record
            if count >= limit:
                logger.info(f"Rate limit exceeded for key {key}")
                return RateLimitResult(False, 0, reset_at)

            count += 1
            self._records[key] = (count, reset_at)
            return RateLimitResult(True, limit - count, reset_at)

    def cleanup(self) -> int:
        """Drop expired windows. Returns the number of removed keys."""
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, reset_at) in self._records.items() if now > reset_at]
            for key in expired:
                del self._records[key]
        return len(expired)

    def reset(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
