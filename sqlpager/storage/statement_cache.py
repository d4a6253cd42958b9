"""
Backing stores for the count statement cache.

Three interchangeable implementations of sqlpager.protocols.StatementCache:

1. MemoryStatementCache - unbounded dict, entries live as long as the process
2. LRUStatementCache - bounded in-memory cache with LRU eviction
3. RedisStatementCache - shared across processes, entries expire after a TTL

Cached count statements are pure functions of their key, so every store may
lose entries (eviction, TTL, Redis outage) or race on population without any
effect on correctness; a miss only costs one re-derivation.
"""

import asyncio
from collections import OrderedDict
from typing import Any

from pydantic import ValidationError
from redis.exceptions import RedisError

from sqlpager.exceptions import ConfigurationError
from sqlpager.logging import logger
from sqlpager.protocols import StatementCache
from sqlpager.schemas.statement import MappedStatement
from sqlpager.settings import app_settings
from sqlpager.storage.redis import RedisPool
from sqlpager.utils.metrics import MetricsCollector

CACHE_TYPES = ("memory", "lru", "redis")


class MemoryStatementCache:
    """
    Unbounded in-memory statement cache.

    Suitable when the set of paginated statements is fixed (mapper files);
    the number of entries is bounded by statements x parameter shapes.
    """

    def __init__(self) -> None:
        self._entries: dict[str, MappedStatement] = {}

    async def get(self, key: str) -> MappedStatement | None:
        return self._entries.get(key)

    async def put(self, key: str, value: MappedStatement) -> None:
        self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)


class LRUStatementCache:
    """
    Bounded in-memory statement cache with LRU eviction.

    Features:
    - OrderedDict keeps entries in recency order
    - asyncio lock guards concurrent access from request tasks
    - Evictions are counted in Prometheus

    Example:
        >>> cache = LRUStatementCache(max_entries=2)
        >>> await cache.put("a", statement_a)
        >>> await cache.put("b", statement_b)
        >>> await cache.get("a")  # "a" is now most recently used
        >>> await cache.put("c", statement_c)  # evicts "b"
    """

    def __init__(self, max_entries: int = app_settings.MS_CACHE_SIZE) -> None:
        """
        Initialize LRU cache.

        Args:
            max_entries: Maximum number of cached statements.

        Raises:
            ValueError: If max_entries is not positive.
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self.max_entries = max_entries
        self._entries: OrderedDict[str, MappedStatement] = OrderedDict()
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> MappedStatement | None:
        async with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    async def put(self, key: str, value: MappedStatement) -> None:
        async with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)

            if len(self._entries) > self.max_entries:
                oldest_key, _ = self._entries.popitem(last=False)
                MetricsCollector.record_statement_cache_eviction()
                logger.debug(
                    f"Evicted LRU statement: {oldest_key} "
                    f"(cache size: {len(self._entries)})"
                )

    async def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics for monitoring.

        Returns:
            Dictionary with cache statistics.
        """
        async with self._lock:
            size = len(self._entries)

        return {
            "size": size,
            "max_entries": self.max_entries,
            "usage_percent": (size / self.max_entries) * 100,
        }

    def __len__(self) -> int:
        return len(self._entries)


class RedisStatementCache:
    """
    Redis-backed statement cache shared by all processes.

    Statements are stored as JSON with a TTL. Redis errors and undecodable
    entries are logged and treated as misses.
    """

    def __init__(
        self,
        ttl: int = app_settings.MS_CACHE_TTL,
        db: int = app_settings.MS_CACHE_REDIS_DB,
    ) -> None:
        self.ttl = ttl
        self.db = db

    async def get(self, key: str) -> MappedStatement | None:
        try:
            redis = await RedisPool.get_instance(self.db)
            if redis is None:
                logger.warning(
                    "Redis unavailable, skipping statement cache lookup"
                )
                return None

            cached = await redis.get(key)
            if cached is None:
                return None
            return MappedStatement.model_validate_json(cached)

        except (RedisError, ConnectionError) as ex:
            logger.error(f"Error reading statement cache: {ex}")
            return None
        except ValidationError as ex:
            logger.error(f"Invalid statement cache data format: {ex}")
            return None

    async def put(self, key: str, value: MappedStatement) -> None:
        try:
            redis = await RedisPool.get_instance(self.db)
            if redis is None:
                logger.warning(
                    "Redis unavailable, skipping statement cache storage"
                )
                return

            await redis.setex(key, self.ttl, value.model_dump_json())
            logger.debug(f"Cached statement {value.id} (TTL: {self.ttl}s)")

        except (RedisError, ConnectionError) as ex:
            logger.error(f"Error writing statement cache: {ex}")


def create_statement_cache(
    cache_type: str = app_settings.MS_CACHE_TYPE,
    cache_size: int = app_settings.MS_CACHE_SIZE,
    ttl: int = app_settings.MS_CACHE_TTL,
) -> StatementCache:
    """
    Create the statement cache selected by configuration.

    Decision logic:
    - "memory" → MemoryStatementCache
    - "lru" with cache_size > 0 → LRUStatementCache(cache_size)
    - "lru" with cache_size <= 0 → MemoryStatementCache (unbounded)
    - "redis" → RedisStatementCache(ttl)

    Args:
        cache_type: Backing store name.
        cache_size: Maximum entries for the LRU store.
        ttl: Entry TTL in seconds for the Redis store.

    Returns:
        Statement cache instance.

    Raises:
        ConfigurationError: If cache_type is unknown.
    """
    normalized = cache_type.strip().lower()

    if normalized == "memory":
        return MemoryStatementCache()
    if normalized == "lru":
        if cache_size <= 0:
            return MemoryStatementCache()
        return LRUStatementCache(max_entries=cache_size)
    if normalized == "redis":
        return RedisStatementCache(ttl=ttl)

    raise ConfigurationError(
        f"Unknown statement cache type '{cache_type}', "
        f"expected one of {', '.join(CACHE_TYPES)}"
    )
