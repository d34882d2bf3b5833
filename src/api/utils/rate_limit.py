"""
Rate limiting for the authentication endpoints.

Fixed-window counters keyed by endpoint scope and client IP. The counter
store is in-process memory or Redis (CACHE_BACKEND). Disabled unless
RATE_LIMIT_ENABLED is set.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable, Dict, Tuple

import redis.asyncio as redis
from fastapi import Depends, Request, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError

logger = logging.getLogger(__name__)


class RateLimitStore(ABC):
    @abstractmethod
    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        """Count one request. Returns (allowed, seconds until the window resets)."""
        pass


class MemoryRateLimitStore(RateLimitStore):
    """
    In-process fixed windows.

    Windows that have run out are evicted on every hit, so the table only
    holds keys seen within their current window.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        # key -> (window start, count, window length)
        self._windows: Dict[str, Tuple[float, int, int]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def _evict_expired(self, now: float) -> None:
        expired = [
            key
            for key, (started, _, window_seconds) in self._windows.items()
            if now - started >= window_seconds
        ]
        for key in expired:
            del self._windows[key]

    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        now = self._clock()
        async with self._lock:
            self._evict_expired(now)
            started, count, _ = self._windows.get(key, (now, 0, window_seconds))
            count += 1
            self._windows[key] = (started, count, window_seconds)
        retry_after = max(int(window_seconds - (now - started)), 1)
        return count <= limit, retry_after


class RedisRateLimitStore(RateLimitStore):
    def __init__(self, client: redis.Redis):
        self.client = client

    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        redis_key = f"ratelimit:{key}"
        # The TTL is set together with the first write, so no key outlives its window
        pipe = self.client.pipeline(transaction=True)
        pipe.set(redis_key, 0, ex=window_seconds, nx=True)
        pipe.incr(redis_key)
        pipe.ttl(redis_key)
        _, count, ttl = await pipe.execute()
        return count <= limit, ttl if ttl and ttl > 0 else window_seconds


@lru_cache
def get_rate_limit_store() -> RateLimitStore:
    if ApplicationConfig.CACHE_BACKEND == "redis":
        return RedisRateLimitStore(
            redis.from_url(ApplicationConfig.REDIS_URL, decode_responses=True)
        )
    return MemoryRateLimitStore()


def client_ip(request: Request) -> str:
    """
    Address the limiter counts against.

    X-Forwarded-For is client-controlled, so it is only honoured when the
    service sits behind a proxy that sets it (TRUST_PROXY_HEADERS).
    """
    if ApplicationConfig.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit(scope: str, limit: int, window_seconds: int):
    """Build a route dependency enforcing `limit` requests per window per client IP."""

    async def dependency(
        request: Request, store: RateLimitStore = Depends(get_rate_limit_store)
    ) -> None:
        if not ApplicationConfig.RATE_LIMIT_ENABLED:
            return

        ip = client_ip(request)
        allowed, retry_after = await store.hit(f"{scope}:{ip}", limit, window_seconds)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {scope} from {ip}")
            raise ClientError(
                Error("RATE_LIMIT_EXCEEDED", "Too many attempts, please try again later"),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                hints={"retry_after": retry_after},
            )

    return dependency
