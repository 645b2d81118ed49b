# app/middlewares/rate_limit.py
import math
import time
from typing import Dict, Optional, Tuple

from fastapi import Request, status
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.response import api_response
from app.platform.utils.client import get_client_ip

logger = get_logger(__name__)

# Seconds between passes that drop expired in-memory windows
SWEEP_INTERVAL = 60


def match_rule(path: str) -> Tuple[Optional[str], Optional[Tuple[int, int]]]:
    """Return the longest configured prefix covering ``path`` and its rule."""
    best, best_rule = None, None
    for prefix, rule in settings.RATE_LIMITS.items():
        prefix = prefix.rstrip("/") or "/"
        covered = prefix == "/" or path == prefix or path.startswith(prefix + "/")
        if covered and (best is None or len(prefix) > len(best)):
            best, best_rule = prefix, rule
    return best, best_rule


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window limit per client IP and path prefix.

    Limits come from ``settings.RATE_LIMITS`` as ``{prefix: (limit, window_seconds)}``.
    The longest prefix covering the request path applies, and every path under
    that prefix shares one window.
    Counts live in Redis when ``REDIS_URL`` is set, in this process otherwise.
    """

    def __init__(self, app):
        super().__init__(app)
        self.redis: Optional[Redis] = None
        self.memory_store: Dict[str, Tuple[int, float]] = {}
        self._next_sweep = 0.0

    async def dispatch(self, request: Request, call_next):
        if not settings.RATE_LIMIT_ENABLED:
            return await call_next(request)

        client_ip = get_client_ip(request) or "unknown"

        # Skip limit if whitelisted
        if client_ip in settings.WHITELIST_IPS:
            return await call_next(request)

        path = request.url.path.rstrip("/") or "/"
        prefix, rule = match_rule(path)

        # If endpoint is not rate-limited, continue
        if rule is None or request.method == "OPTIONS":
            return await call_next(request)

        limit, window = rule
        if settings.REDIS_URL:
            allowed, retry_after = await self._hit_redis(f"rl:{client_ip}:{prefix}", limit, window)
        else:
            allowed, retry_after = self._hit_memory(f"{client_ip}:{prefix}", limit, window)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client_ip} on {path}")
            return api_response(
                data={"retry_after": retry_after},
                message="Too many requests. Please try again later.",
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _hit_memory(self, key: str, limit: int, window: int) -> Tuple[bool, int]:
        now = time.monotonic()
        if now >= self._next_sweep:
            self._sweep(now)

        count, reset_at = self.memory_store.get(key, (0, now + window))

        if now >= reset_at:
            count, reset_at = 0, now + window

        if count >= limit:
            return False, max(1, math.ceil(reset_at - now))

        self.memory_store[key] = (count + 1, reset_at)
        return True, 0

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self.memory_store.items() if now >= reset_at]
        for key in expired:
            del self.memory_store[key]
        self._next_sweep = now + SWEEP_INTERVAL

    async def _hit_redis(self, key: str, limit: int, window: int) -> Tuple[bool, int]:
        if self.redis is None:
            self.redis = Redis.from_url(settings.REDIS_URL, decode_responses=True)

        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, window)

        if count > limit:
            ttl = await self.redis.ttl(key)
            if ttl < 0:
                # Key lost its expiry; start a new window
                await self.redis.expire(key, window)
                ttl = window
            return False, ttl

        return True, 0
