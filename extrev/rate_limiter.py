"""
Redis connection and fixed-window rate limiting for the auth endpoints
"""

import logging
import os
import time
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from .config import AUTH_RATE_LIMIT, AUTH_RATE_WINDOW

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def _mask_url(redis_url: str) -> str:
    if "@" in redis_url:
        url_parts = redis_url.split("@")
        protocol = url_parts[0].split(":")[0]
        return f"{protocol}:****@{url_parts[1]}"
    return "****"


def get_redis_client() -> redis.Redis:
    """
    Get or create the shared Redis client.
    REDIS_URL wins over the individual REDIS_* settings.
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection...")
        redis_url = os.getenv("REDIS_URL")

        if redis_url:
            logger.info(f"📡 Using Redis URL connection: {_mask_url(redis_url)}")
            try:
                client = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=10,
                    retry_on_timeout=True,
                    health_check_interval=30,
                    max_connections=20,
                )
                client.ping()
                logger.info("✅ Redis connected successfully via URL")
            except Exception as e:
                logger.error(f"❌ Failed to connect to Redis via URL: {str(e)}")
                raise
        else:
            redis_host = os.getenv("REDIS_HOST", "localhost")
            redis_port = int(os.getenv("REDIS_PORT", "6379"))
            redis_password = os.getenv("REDIS_PASSWORD", None)
            redis_db = int(os.getenv("REDIS_DB", "0"))
            redis_ssl = os.getenv("REDIS_SSL", "false").lower() == "true"

            logger.info(
                f"📡 Using Redis at {redis_host}:{redis_port} db={redis_db} "
                f"ssl={'on' if redis_ssl else 'off'} password={'set' if redis_password else 'not set'}"
            )
            try:
                client = redis.Redis(
                    host=redis_host,
                    port=redis_port,
                    password=redis_password,
                    db=redis_db,
                    ssl=redis_ssl,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=10,
                    retry_on_timeout=True,
                    health_check_interval=30,
                    max_connections=20,
                )
                client.ping()
                logger.info(f"✅ Redis connected successfully at {redis_host}:{redis_port}")
            except Exception as e:
                logger.error(f"❌ Failed to connect to Redis: {str(e)}")
                raise

        redis_client = client

    return redis_client


def check_rate_limit(key: str, limit: int, window_seconds: int, client: redis.Redis) -> tuple[bool, int, int]:
    """Count a hit against a fixed window.

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    pipe = client.pipeline()
    pipe.incr(key)
    pipe.ttl(key)
    count, ttl = pipe.execute()

    if ttl is None or ttl < 0:
        client.expire(key, window_seconds)
        ttl = window_seconds

    return count <= limit, count, ttl


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_dependency(request: Request, limit: int, window_seconds: int, key_prefix: str):
    """Per-IP limit. Fails closed with 503 when Redis is unreachable."""
    try:
        client = get_redis_client()
        key = f"{key_prefix}:{client_ip(request)}"
        is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, client)
    except Exception as e:
        logger.error(f"❌ Rate limiting error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate limiting service temporarily unavailable",
        ) from e

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
            headers={"Retry-After": str(ttl)},
        )

    request.state.rate_limit_remaining = limit - current_count
    request.state.rate_limit_reset = int(time.time()) + ttl


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Build a rate limiter dependency:

        @router.post("/login", dependencies=[Depends(create_rate_limiter(10, 60, "login"))])
    """

    async def rate_limiter(request: Request):
        return await rate_limit_dependency(request, limit, window_seconds, key_prefix)

    return rate_limiter


auth_rate_limiter = create_rate_limiter(AUTH_RATE_LIMIT, AUTH_RATE_WINDOW, key_prefix="auth")
