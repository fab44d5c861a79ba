"""
Rate Limiting Middleware

Per-negocio rate limiting using Redis.

ARCHITECTURE: Token bucket per negocio ID. Requests that are not scoped
to a negocio (health, super-admin, login) are not limited here.

PRODUCTION NOTES:
- If Redis is down the limiter lets traffic through (availability first)
- Limits are global settings, not per negocio
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from typing import Optional, Tuple
import redis
import time
import logging
from negocio_api.config import get_settings
from negocio_api.core.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Token bucket rate limiter per negocio.

    Must run after TenantContextMiddleware, which sets request.state.tenant_id.
    """

    def __init__(self, app, redis_client: Optional[redis.Redis] = None):
        super().__init__(app)
        settings = get_settings()
        self.rate_limit = settings.RATE_LIMIT_PER_MINUTE
        self.burst = settings.RATE_LIMIT_BURST

        if redis_client is not None:
            self.redis_client = redis_client
            self.redis_available = True
        else:
            try:
                self.redis_client = redis.from_url(
                    settings.REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=5
                )
                self.redis_client.ping()
                self.redis_available = True
                logger.info("Redis connection established for rate limiting")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.error(f"Redis connection failed: {e}")
                self.redis_available = False

        self.excluded_paths = [
            "/docs",
            "/redoc",
            "/openapi.json",
            "/health",
            "/media",
        ]

    async def dispatch(self, request: Request, call_next):
        """Apply rate limiting per negocio."""

        if any(request.url.path.startswith(path) for path in self.excluded_paths):
            return await call_next(request)

        if not self.redis_available:
            return await call_next(request)

        negocio_id = getattr(request.state, "tenant_id", None)
        if not negocio_id:
            return await call_next(request)

        allowed, retry_after = self._check_rate_limit(negocio_id)

        if not allowed:
            logger.warning(
                f"Rate limit exceeded for negocio {negocio_id}",
                extra={"tenant_id": negocio_id}
            )
            exc = RateLimitExceeded(retry_after)
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": exc.detail, "retry_after": retry_after},
                headers=exc.headers
            )

        return await call_next(request)

    def _check_rate_limit(self, negocio_id: str) -> Tuple[bool, int]:
        """
        Check if a request is allowed under the rate limit.

        Returns: (allowed, retry_after seconds)

        Token bucket:
        - Bucket holds at most `burst` tokens
        - Tokens refill at rate_limit per minute
        - Each request consumes one token
        """
        key = f"rate_limit:{negocio_id}"
        key_timestamp = f"{key}:timestamp"

        try:
            current_tokens = self.redis_client.get(key)
            last_update = self.redis_client.get(key_timestamp)

            now = time.time()

            if current_tokens is None:
                current_tokens = self.burst - 1
                self.redis_client.setex(key, 60, current_tokens)
                self.redis_client.setex(key_timestamp, 60, now)
                return True, 0

            current_tokens = float(current_tokens)
            last_update = float(last_update) if last_update else now

            elapsed = now - last_update
            tokens_to_add = elapsed * (self.rate_limit / 60.0)
            new_tokens = min(self.burst, current_tokens + tokens_to_add)

            if new_tokens >= 1:
                new_tokens -= 1
                self.redis_client.setex(key, 60, new_tokens)
                self.redis_client.setex(key_timestamp, 60, now)
                return True, 0

            tokens_needed = 1 - new_tokens
            retry_after = int((tokens_needed / (self.rate_limit / 60.0)) + 1)
            return False, retry_after

        except redis.RedisError as e:
            logger.error(f"Redis error in rate limiting: {e}")
            return True, 0
