"""Fixed-window throttling for the public submit endpoints.

Counters live in Redis when it answers a ping at first use; otherwise the
process keeps its own counters, which is enough for a single worker.
"""
from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Protocol

import redis
from fastapi import HTTPException, Request

from outreach.core.config import settings

_LOG = logging.getLogger("outreach.rate_limit")


@dataclass
class RateLimitResult:
    allowed: bool
    retry_after_seconds: int
    current_value: int


class RateLimiter(Protocol):
    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        ...


class InMemoryRateLimiter:
    def __init__(self):
        self._windows: dict[str, tuple[int, float]] = {}
        self._lock = Lock()

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        now = time.monotonic()
        with self._lock:
            count, resets_at = self._windows.get(key, (0, 0.0))
            if resets_at <= now:
                count, resets_at = 0, now + max(window_seconds, 1)
            count += 1
            self._windows[key] = (count, resets_at)
        return RateLimitResult(
            allowed=count <= limit,
            retry_after_seconds=max(1, int(resets_at - now)),
            current_value=count,
        )


class RedisRateLimiter:
    def __init__(self, client: redis.Redis):
        self.client = client
        # Counts in process while redis is unreachable.
        self.fallback = InMemoryRateLimiter()

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        window = max(int(window_seconds), 1)
        try:
            count = int(self.client.incr(key))
            if count == 1:
                self.client.expire(key, window)
            ttl = int(self.client.ttl(key))
        except (redis.RedisError, OSError) as exc:
            _LOG.warning("redis rate limit hit failed (%s); counting in process", exc)
            return self.fallback.hit(key, limit=limit, window_seconds=window)
        return RateLimitResult(allowed=count <= limit, retry_after_seconds=ttl if ttl > 0 else window, current_value=count)


_limiter: RateLimiter | None = None


def _connect() -> RateLimiter:
    client = redis.Redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=0.4,
        socket_connect_timeout=0.4,
    )
    try:
        client.ping()
    except (redis.RedisError, OSError) as exc:
        _LOG.warning("redis unavailable for rate limiting (%s); counting in process", exc)
        return InMemoryRateLimiter()
    return RedisRateLimiter(client)


def get_rate_limiter() -> RateLimiter:
    global _limiter
    if _limiter is None:
        _limiter = _connect()
    return _limiter


def reset_rate_limiter_for_tests() -> None:
    global _limiter
    _limiter = None


def client_ip(request: Request) -> str:
    forwarded = str(request.headers.get("x-forwarded-for") or "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.client.host if request.client else "unknown"


def _hash_key_part(value: str | None) -> str:
    raw = str(value or "").strip()
    if not raw:
        return "-"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:20]


def enforce_public_submit_limit(request: Request, scope: str) -> None:
    """Count one public submission for the caller's IP; 429 once the window is exhausted."""
    result = get_rate_limiter().hit(
        f"submit:{scope}:ip:{_hash_key_part(client_ip(request))}",
        limit=max(int(settings.PUBLIC_SUBMIT_RATE_LIMIT), 1),
        window_seconds=max(int(settings.PUBLIC_SUBMIT_RATE_WINDOW_SECONDS), 1),
    )
    if result.allowed:
        return
    retry_after = max(result.retry_after_seconds, 1)
    _LOG.info("public submit rate limited scope=%s count=%s", scope, result.current_value)
    raise HTTPException(
        status_code=429,
        detail=f"Too many submissions. Try again in {retry_after} seconds.",
        headers={"Retry-After": str(retry_after)},
    )
