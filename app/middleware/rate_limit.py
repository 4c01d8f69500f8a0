from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.db.redis import redis_client

logger = logging.getLogger(__name__)

_EXEMPT_PREFIXES = ("/health", "/metrics")


class RedisRateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed one-minute window per client, counted in Redis."""

    def __init__(self, app, limit_per_minute: int | None = None, client: Redis | None = None):
        super().__init__(app)
        self.limit_per_minute = limit_per_minute or settings.rate_limit_per_minute
        self.client = client or redis_client

    @staticmethod
    def _resolve_subject(request: Request) -> str:
        forwarded = (request.headers.get("x-forwarded-for") or "").strip()
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"

        real_ip = (request.headers.get("x-real-ip") or "").strip()
        if real_ip:
            return f"ip:{real_ip}"

        ip = request.client.host if request.client else "unknown"
        return f"ip:{ip}"

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable]):
        if request.url.path.startswith(_EXEMPT_PREFIXES):
            return await call_next(request)

        subject = self._resolve_subject(request)
        minute_bucket = int(time.time() // 60)
        key = f"rl:{subject}:{minute_bucket}"

        try:
            count = await self.client.incr(key)
            if count == 1:
                await self.client.expire(key, 65)
            if count > self.limit_per_minute:
                return JSONResponse(
                    status_code=429,
                    content={"detail": "Rate limit exceeded"},
                    headers={"Retry-After": "60"},
                )
        except RedisError:
            # Fail open when Redis is unavailable.
            logger.warning("Rate limiter unavailable, letting %s through", subject)

        return await call_next(request)
