from typing import Any, Optional

from userhub.core.logging import get_logger
from userhub.libs.cache.exceptions import CacheError, CacheKeyError
from userhub.libs.cache.factory import CacheFactory
from userhub.libs.cache.interface import CacheProvider

logger = get_logger(__name__)


class CacheService:
    """
    Best-effort facade over a cache provider.

    A failed read is reported as a miss and a failed write or delete as
    ``False``, both logged. The source of truth stays correct without the
    cache, only slower. ``invalidate`` is the one call that raises.
    """

    def __init__(self, provider: Optional[CacheProvider] = None) -> None:
        self._provider = provider or CacheFactory.get_configured_provider()

    @property
    def provider(self) -> CacheProvider:
        return self._provider

    async def get(self, key: str) -> Any:
        """
        Get a value from cache.

        Returns:
            Cached value or None on a miss or a cache fault
        """
        try:
            response = await self._provider.get(key)
        except CacheError as e:
            logger.error(f"Cache get failed for key {key}, treating as miss: {e.message}")
            return None

        if not response.success:
            logger.warning(f"Cache get for key {key} returned an error, treating as miss: {response.error}")
            return None

        return response.value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        try:
            response = await self._provider.set(key, value, ttl)
        except CacheError as e:
            logger.error(f"Cache set failed for key {key}: {e.message}")
            return False

        if not response.success:
            logger.warning(f"Cache set for key {key} was rejected: {response.error}")
        return response.success

    async def delete(self, key: str) -> bool:
        try:
            response = await self._provider.delete(key)
        except CacheError as e:
            logger.error(f"Cache delete failed for key {key}: {e.message}")
            return False

        return response.success

    async def invalidate(self, key: str) -> None:
        """
        Delete a key that must not outlive the data it was built from.

        Unlike ``delete``, faults are not absorbed.

        Raises:
            CacheError: If the provider fails or rejects the key
        """
        response = await self._provider.delete(key)

        if not response.success:
            raise CacheKeyError(response.error or f"Cache invalidation rejected for key {key}")

    async def exists(self, key: str) -> bool:
        try:
            return await self._provider.exists(key)
        except CacheError as e:
            logger.error(f"Cache exists check failed for key {key}: {e.message}")
            return False

    async def health_check(self) -> bool:
        try:
            return await self._provider.health_check()
        except CacheError as e:
            logger.error(f"Cache health check failed: {e.message}")
            return False

    async def close(self) -> None:
        try:
            await self._provider.close()
        except CacheError as e:
            logger.error(f"Cache close failed: {e.message}")


_cache_service: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Get or create the process-wide cache service."""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService()
    return _cache_service


async def setup_cache() -> CacheService:
    cache_service = get_cache_service()

    if await cache_service.health_check():
        logger.info("Cache service initialized successfully")
    else:
        logger.warning("Cache service health check failed")

    return cache_service


async def teardown_cache() -> None:
    global _cache_service
    if _cache_service:
        await _cache_service.close()
        _cache_service = None
