import time
from typing import Any, Callable, Dict, Optional

from userhub.libs.cache.exceptions import CacheKeyError, CacheSerializationError
from userhub.libs.cache.interface import CacheProvider
from userhub.libs.cache.schemas import CacheItem, CacheResponse, MemoryCacheConfiguration


class MemoryCacheProvider(CacheProvider):
    """
    In-process cache provider backed by a dictionary.

    Expired items are dropped lazily when touched. When ``max_size`` is reached
    the oldest item is evicted to make room. Everything runs on the event loop
    thread, so no locking is needed.
    """

    def __init__(self, config: MemoryCacheConfiguration, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(config)
        self.config: MemoryCacheConfiguration = config
        self._clock = clock
        self._cache: Dict[str, CacheItem] = {}

    def _is_expired(self, item: CacheItem) -> bool:
        return item.expires_at is not None and self._clock() >= item.expires_at

    def _live_item(self, cache_key: str) -> Optional[CacheItem]:
        item = self._cache.get(cache_key)
        if item is not None and self._is_expired(item):
            del self._cache[cache_key]
            return None
        return item

    async def get(self, key: str) -> CacheResponse:
        try:
            self._validate_key(key)
            item = self._live_item(self._build_key(key))

            if item is None:
                return CacheResponse(success=True)

            return CacheResponse(success=True, value=self._deserialize_value(item.value), from_cache=True)
        except (CacheKeyError, CacheSerializationError) as e:
            return CacheResponse(success=False, error=e.message)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        try:
            self._validate_key(key)
            cache_key = self._build_key(key)

            if ttl is None:
                ttl = self.config.default_ttl

            now = self._clock()
            item = CacheItem(
                value=self._serialize_value(value),
                created_at=now,
                expires_at=now + ttl if ttl > 0 else None,
            )

            if cache_key not in self._cache and len(self._cache) >= self.config.max_size:
                self._evict_oldest()

            self._cache[cache_key] = item
            return CacheResponse(success=True)
        except (CacheKeyError, CacheSerializationError) as e:
            return CacheResponse(success=False, error=e.message)

    def _evict_oldest(self) -> None:
        if self._cache:
            oldest = min(self._cache, key=lambda k: self._cache[k].created_at)
            del self._cache[oldest]

    async def delete(self, key: str) -> CacheResponse:
        try:
            self._validate_key(key)
        except CacheKeyError as e:
            return CacheResponse(success=False, error=e.message)

        self._cache.pop(self._build_key(key), None)
        return CacheResponse(success=True)

    async def exists(self, key: str) -> bool:
        try:
            self._validate_key(key)
        except CacheKeyError:
            return False

        return self._live_item(self._build_key(key)) is not None

    async def ttl(self, key: str) -> Optional[int]:
        try:
            self._validate_key(key)
        except CacheKeyError:
            return None

        item = self._live_item(self._build_key(key))
        if item is None:
            return None
        if item.expires_at is None:
            return -1
        return max(0, int(item.expires_at - self._clock()))

    async def clear(self) -> CacheResponse:
        prefix = f"{self.config.key_prefix}:"
        for cache_key in [k for k in self._cache if k.startswith(prefix)]:
            del self._cache[cache_key]
        return CacheResponse(success=True)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._cache.clear()
