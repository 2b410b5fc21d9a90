"""Redis cache layer for link resolution."""

import logging
from typing import Optional

import redis.asyncio as redis


class RedisCache:
    """Read-through cache of code -> long URL.

    Links are immutable, so entries only ever expire by TTL. Every failure is
    logged and treated as a miss; the store stays the source of truth.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Default TTL for cached items
            client: Optional pre-built client (connect() is then a ping only)
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = client
        self.enabled = redis_url is not None or client is not None

        if self.enabled:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self.enabled:
            return

        try:
            if self.client is None:
                self.client = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except Exception as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    async def get(self, code: str) -> Optional[str]:
        """Get the cached long URL for a code, or None."""
        if not self.enabled or not self.client:
            return None

        try:
            value = await self.client.get(self.get_cache_key(code))
        except Exception as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value or None

    async def set(self, code: str, long_url: str, ttl: Optional[int] = None) -> bool:
        """Cache a long URL for a code.

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(self.get_cache_key(code), ttl or self.ttl_seconds, long_url)
            return True
        except Exception as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        if not self.enabled or not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except Exception as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    @staticmethod
    def get_cache_key(code: str) -> str:
        return f"shortlink:{code}"
