"""Redis client wrapper for sharing cached query results."""

import redis
from redis.exceptions import RedisError

from vidto.logger import cache_logger


class RedisClient:
    """Redis client wrapper that degrades to a no-op when Redis is unreachable."""

    def __init__(self, url: str, client: redis.Redis | None = None):
        """
        Initialize Redis client.

        Args:
            url: redis:// or rediss:// URL
            client: Pre-built client (skips connecting)
        """
        self.url = url
        self._client = client
        if self._client is None:
            self._connect()

    def _connect(self):
        """Connect to Redis."""
        try:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,  # Decode bytes to strings
                socket_connect_timeout=5,  # Connection timeout
                socket_timeout=5,  # Operation timeout
                retry_on_timeout=True,
                health_check_interval=30,  # Health check every 30s
            )

            # Test connection
            self._client.ping()
            cache_logger.info("Redis connected successfully")

        except RedisError as e:
            cache_logger.error(f"Redis connection failed: {e}")
            cache_logger.warning("Query results will not be shared")
            self._client = None

    @property
    def client(self):
        """Get Redis client instance."""
        return self._client

    def get(self, key: str) -> str | None:
        """Get value from Redis."""
        if not self._client:
            return None

        try:
            return self._client.get(key)
        except RedisError as e:
            cache_logger.debug(f"Redis GET error: {e}")
            return None

    def set(self, key: str, value: str, expire: int | None = None) -> bool:
        """
        Set value in Redis.

        Args:
            key: Cache key
            value: Value to cache
            expire: Expiration time in seconds (optional)

        Returns:
            True if successful, False otherwise
        """
        if not self._client:
            return False

        try:
            if expire:
                return bool(self._client.setex(key, expire, value))
            else:
                return bool(self._client.set(key, value))
        except RedisError as e:
            cache_logger.debug(f"Redis SET error: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from Redis."""
        if not self._client:
            return False

        try:
            return self._client.delete(key) > 0
        except RedisError as e:
            cache_logger.debug(f"Redis DELETE error: {e}")
            return False

    def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix. Returns the number removed."""
        if not self._client:
            return 0

        try:
            keys = list(self._client.scan_iter(match=f"{prefix}*"))
            if not keys:
                return 0
            return self._client.delete(*keys)
        except RedisError as e:
            cache_logger.debug(f"Redis DELETE prefix error: {e}")
            return 0

    def close(self):
        """Close Redis connection."""
        if self._client:
            self._client.close()
