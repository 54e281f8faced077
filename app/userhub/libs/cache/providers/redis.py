from typing import Any, List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from userhub.core.logging import get_logger
from userhub.libs.cache.exceptions import CacheConnectionError, CacheKeyError, CacheSerializationError
from userhub.libs.cache.interface import CacheProvider
from userhub.libs.cache.schemas import CacheResponse, RedisCacheConfiguration

logger = get_logger(__name__)


class RedisCacheProvider(CacheProvider):
    """
    Redis cache provider with a lazily created, pooled ``redis.asyncio`` client.

    Connection and command faults surface as ``CacheConnectionError``.
    """

    def __init__(self, config: RedisCacheConfiguration, client: Optional[redis.Redis] = None) -> None:
        super().__init__(config)
        self.config: RedisCacheConfiguration = config
        self._client: Optional[redis.Redis] = client

    async def _get_client(self) -> redis.Redis:
        if self._client is None:
            pool = redis.ConnectionPool.from_url(
                self.config.url,
                socket_timeout=self.config.socket_timeout,
                socket_connect_timeout=self.config.socket_connect_timeout,
                health_check_interval=self.config.health_check_interval,
                max_connections=self.config.max_connections,
                decode_responses=True,
            )
            self._client = redis.Redis(connection_pool=pool)
            logger.info("Redis cache provider client created")

        return self._client

    async def get(self, key: str) -> CacheResponse:
        try:
            self._validate_key(key)
            client = await self._get_client()
            value = await client.get(self._build_key(key))

            if value is None:
                return CacheResponse(success=True)

            return CacheResponse(success=True, value=self._deserialize_value(value), from_cache=True)
        except (CacheKeyError, CacheSerializationError) as e:
            logger.error(f"Cache get operation failed for key {key}: {e.message}")
            return CacheResponse(success=False, error=e.message)
        except RedisError as e:
            raise CacheConnectionError(f"Redis get failed for key {key}: {e!s}") from e

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        try:
            self._validate_key(key)
            cache_key = self._build_key(key)
            serialized_value = self._serialize_value(value)
            client = await self._get_client()

            if ttl is None:
                ttl = self.config.default_ttl

            if ttl > 0:
                await client.set(cache_key, serialized_value, ex=ttl)
            else:
                await client.set(cache_key, serialized_value)

            return CacheResponse(success=True)
        except (CacheKeyError, CacheSerializationError) as e:
            logger.error(f"Cache set operation failed for key {key}: {e.message}")
            return CacheResponse(success=False, error=e.message)
        except RedisError as e:
            raise CacheConnectionError(f"Redis set failed for key {key}: {e!s}") from e

    async def delete(self, key: str) -> CacheResponse:
        try:
            self._validate_key(key)
            client = await self._get_client()
            await client.delete(self._build_key(key))
            return CacheResponse(success=True)
        except CacheKeyError as e:
            return CacheResponse(success=False, error=e.message)
        except RedisError as e:
            raise CacheConnectionError(f"Redis delete failed for key {key}: {e!s}") from e

    async def exists(self, key: str) -> bool:
        try:
            self._validate_key(key)
            client = await self._get_client()
            return bool(await client.exists(self._build_key(key)))
        except CacheKeyError:
            return False
        except RedisError as e:
            raise CacheConnectionError(f"Redis exists failed for key {key}: {e!s}") from e

    async def ttl(self, key: str) -> Optional[int]:
        try:
            self._validate_key(key)
            client = await self._get_client()
            ttl_value = await client.ttl(self._build_key(key))
        except CacheKeyError:
            return None
        except RedisError as e:
            raise CacheConnectionError(f"Redis ttl failed for key {key}: {e!s}") from e

        # -2: missing key, -1: no expiry
        return None if ttl_value == -2 else ttl_value

    async def clear(self) -> CacheResponse:
        try:
            client = await self._get_client()

            # SCAN rather than KEYS so large keyspaces don't block the server
            keys_to_delete: List[str] = []
            async for cache_key in client.scan_iter(match=f"{self.config.key_prefix}:*", count=100):
                keys_to_delete.append(cache_key)

            if keys_to_delete:
                await client.delete(*keys_to_delete)

            return CacheResponse(success=True)
        except RedisError as e:
            raise CacheConnectionError(f"Redis clear failed: {e!s}") from e

    async def health_check(self) -> bool:
        try:
            client = await self._get_client()
            return bool(await client.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e!s}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
