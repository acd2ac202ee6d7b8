"""
Redis cache-aside layer for option lists, list pages and sessions.

Query results are cached under a hash of the compiled SQL and its bound
parameters. Writes never evict these entries; they age out by TTL.
"""
import hashlib
import json
import logging
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False


# Global cache instance
cache = Cache()


def build_query_key(prefix: str, stmt) -> str:
    """Deterministic key for a statement: same SQL text and params, same key."""
    compiled = stmt.compile()
    params = json.dumps(compiled.params, sort_keys=True, default=str)
    digest = hashlib.sha256(f"{compiled}|{params}".encode("utf-8")).hexdigest()
    return f"{prefix}:{digest}"


def cached_query(db: Session, stmt, *, prefix: str, ttl: int) -> list[dict]:
    """
    Run a select through the cache.

    Rows are returned as JSON-compatible dicts so a hit and a miss look the
    same to callers (dates come back as ISO strings either way).
    """
    key = build_query_key(prefix, stmt)
    rows = cache.get(key)
    if rows is not None:
        return rows

    rows = jsonable_encoder([dict(row) for row in db.execute(stmt).mappings().all()])
    cache.set(key, rows, ttl)
    return rows


def session_cache_key(token: str) -> str:
    return f"session:{hashlib.sha256(token.encode('utf-8')).hexdigest()}"


def get_cache_stats() -> dict:
    client = cache._get_client()
    if not client:
        return {"available": False}

    try:
        info = client.info()
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "available": True,
            "used_memory": info.get("used_memory_human"),
            "connected_clients": info.get("connected_clients"),
            "keyspace_hits": hits,
            "keyspace_misses": misses,
            "hit_rate": (hits / max(hits + misses, 1)) * 100,
        }
    except Exception as e:
        logger.error(f"❌ Failed to get cache stats: {e}")
        return {"available": False, "error": str(e)}
