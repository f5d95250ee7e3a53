"""
Statistics Cache

Keyed cache for aggregated statistics. A key covers the sorted set of
property ids, the metric set and the options the result was computed with
(rental screening and its price ceiling), so the same comparable set
always maps to the same entry regardless of request order.

Entries live in a local dict unless a redis client is supplied. Either way
the cache never refreshes itself: writers call invalidate_properties() with
the ids they touched, or clear().
"""
import hashlib
import json
import time
from typing import Any, Dict, Iterable, Optional, Set, Tuple

import redis
from redis.exceptions import RedisError

from config.settings import settings
from src.cma.models.results import StatisticsResult
from src.cma.store.base import unique_ids
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def get_redis_client(redis_url: Optional[str] = None) -> Optional[redis.Redis]:
    """
    Connect to redis.

    Args:
        redis_url: Connection URL (defaults to settings.redis_url)

    Returns:
        Redis client, or None when no URL is configured or the ping fails
    """
    redis_url = redis_url or settings.redis_url
    if not redis_url:
        logger.info("redis_connection_skipped", reason="redis_url not configured")
        return None

    try:
        client = redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        client.ping()
    except RedisError as e:
        logger.warning("redis_connection_failed", error=str(e))
        return None
    return client


def make_cache_key(
    prefix: str,
    property_ids: Iterable[str],
    metrics: Iterable[str],
    options: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Build the cache key for a comparable set.

    Args:
        prefix: Key prefix
        property_ids: Requested ids, in any order
        metrics: Metric names covered by the entry
        options: Settings the result depends on, such as rental screening.
            Results computed under different options never share a key.

    Returns:
        Cache key string
    """
    key_data = {
        "ids": sorted(unique_ids(property_ids)),
        "metrics": sorted(set(metrics)),
        "options": options or {},
    }
    key_string = json.dumps(key_data, sort_keys=True)
    key_hash = hashlib.md5(key_string.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


class StatisticsCache:
    """Statistics results keyed by comparable set, with explicit invalidation."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        ttl_seconds: Optional[int] = None,
        prefix: Optional[str] = None,
    ):
        """
        Args:
            client: Redis client; None keeps entries in process memory
            ttl_seconds: Entry lifetime (defaults to settings.statistics_cache_ttl_seconds)
            prefix: Key prefix (defaults to settings.statistics_cache_prefix)
        """
        self.client = client
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None else settings.statistics_cache_ttl_seconds
        )
        self.prefix = prefix or settings.statistics_cache_prefix

        self._entries: Dict[str, Tuple[StatisticsResult, float]] = {}
        self._index: Dict[str, Set[str]] = {}
        self.hits = 0
        self.misses = 0

    @property
    def backend(self) -> str:
        return "redis" if self.client is not None else "local"

    def _index_key(self, property_id: str) -> str:
        return f"{self.prefix}:idx:{property_id}"

    def get(
        self,
        property_ids: Iterable[str],
        metrics: Iterable[str],
        options: Optional[Dict[str, Any]] = None,
    ) -> Optional[StatisticsResult]:
        """
        Look up a cached result.

        Args:
            property_ids: Comparable set
            metrics: Metric names
            options: Computation options the result must have been built with

        Returns:
            Cached StatisticsResult or None on a miss
        """
        key = make_cache_key(self.prefix, property_ids, metrics, options)
        result = self._read(key)
        if result is None:
            self.misses += 1
        else:
            self.hits += 1
        return result

    def set(
        self,
        property_ids: Iterable[str],
        metrics: Iterable[str],
        result: StatisticsResult,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Store a result.

        Args:
            property_ids: Comparable set the result was computed from
            metrics: Metric names
            result: Aggregated statistics
            options: Computation options used to build the result

        Returns:
            Cache key written
        """
        ids = unique_ids(property_ids)
        key = make_cache_key(self.prefix, ids, metrics, options)

        if self.client is None:
            self._entries[key] = (result, time.monotonic() + self.ttl_seconds)
            for property_id in ids:
                self._index.setdefault(property_id, set()).add(key)
            return key

        # Decimals are stored as strings so a cached result reads back exactly
        payload = json.dumps(result.model_dump(), default=str)
        try:
            self.client.setex(key, self.ttl_seconds, payload)
            for property_id in ids:
                index_key = self._index_key(property_id)
                self.client.sadd(index_key, key)
                self.client.expire(index_key, self.ttl_seconds)
        except RedisError as e:
            logger.warning("statistics_cache_write_failed", key=key, error=str(e))
        return key

    def _read(self, key: str) -> Optional[StatisticsResult]:
        if self.client is None:
            entry = self._entries.get(key)
            if entry is None:
                return None
            result, expires_at = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return result

        try:
            payload = self.client.get(key)
        except RedisError as e:
            logger.warning("statistics_cache_read_failed", key=key, error=str(e))
            return None
        if payload is None:
            return None
        return StatisticsResult.model_validate(json.loads(payload))

    def invalidate_properties(self, property_ids: Iterable[str]) -> int:
        """
        Drop every entry whose comparable set contains one of the ids.

        Suitable as an InMemoryPropertyStore change listener.

        Args:
            property_ids: Ids of listings that were written or removed

        Returns:
            Number of entries removed
        """
        ids = unique_ids(property_ids)

        if self.client is None:
            keys = set()
            for property_id in ids:
                keys |= self._index.pop(property_id, set())
            removed = 0
            for key in keys:
                if self._entries.pop(key, None) is not None:
                    removed += 1
        else:
            try:
                keys = set()
                for property_id in ids:
                    keys |= set(self.client.smembers(self._index_key(property_id)))
                removed = self.client.delete(*keys) if keys else 0
                self.client.delete(*[self._index_key(pid) for pid in ids])
            except RedisError as e:
                logger.warning("statistics_cache_invalidation_failed", error=str(e))
                return 0

        if removed:
            logger.info("statistics_cache_invalidated", property_count=len(ids), removed=removed)
        return removed

    def clear(self) -> int:
        """
        Drop every entry under this cache's prefix.

        Returns:
            Number of keys deleted
        """
        if self.client is None:
            removed = len(self._entries)
            self._entries.clear()
            self._index.clear()
        else:
            try:
                keys = self.client.keys(f"{self.prefix}:*")
                removed = self.client.delete(*keys) if keys else 0
            except RedisError as e:
                logger.warning("statistics_cache_clear_failed", error=str(e))
                return 0

        logger.info("statistics_cache_cleared", removed=removed)
        return removed

    def stats(self) -> dict:
        """
        Hit/miss counters for this cache instance.

        Returns:
            Dictionary with cache stats
        """
        lookups = self.hits + self.misses
        return {
            "backend": self.backend,
            "entries": len(self._entries) if self.client is None else None,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / max(lookups, 1) * 100,
        }


def build_statistics_cache() -> Optional[StatisticsCache]:
    """
    Statistics cache as configured in settings.

    Processes that write listings and the API must share redis for writes to
    reach the API's entries; a local cache only sees its own process.

    Returns:
        StatisticsCache, or None when statistics_cache_enabled is off
    """
    if not settings.statistics_cache_enabled:
        return None
    return StatisticsCache(client=get_redis_client())
