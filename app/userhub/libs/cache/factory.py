from typing import Any

from userhub.core.config import settings
from userhub.core.logging import get_logger
from userhub.libs.cache.exceptions import CacheConfigurationError
from userhub.libs.cache.interface import CacheProvider
from userhub.libs.cache.providers.memory import MemoryCacheProvider
from userhub.libs.cache.providers.redis import RedisCacheProvider
from userhub.libs.cache.schemas import MemoryCacheConfiguration, RedisCacheConfiguration

logger = get_logger(__name__)


class CacheFactory:
    """
    Factory for creating cache providers based on environment and configuration.
    """

    _providers: dict[str, type[CacheProvider]] = {
        "memory": MemoryCacheProvider,
        "redis": RedisCacheProvider,
    }

    @classmethod
    def create_provider(cls, provider_type: str, config: Any) -> CacheProvider:
        """
        Create a provider instance.

        Raises:
            CacheConfigurationError: If the provider type is not supported
        """
        if provider_type not in cls._providers:
            raise CacheConfigurationError(f"Unsupported cache provider type: {provider_type}")

        return cls._providers[provider_type](config)

    @classmethod
    def get_configured_provider(cls) -> CacheProvider:
        """
        Local runs keep the cache in process; every other environment talks to Redis.
        """
        provider_type = "memory" if settings.ENVIRONMENT == "local" else "redis"

        logger.info(f"Creating cache provider: {provider_type} for environment: {settings.ENVIRONMENT}")

        if provider_type == "memory":
            return cls.create_provider(
                "memory",
                MemoryCacheConfiguration(
                    default_ttl=settings.CACHE_DEFAULT_TTL,
                    key_prefix=settings.CACHE_KEY_PREFIX,
                    max_size=settings.CACHE_MEMORY_MAX_SIZE,
                ),
            )

        return cls.create_provider(
            "redis",
            RedisCacheConfiguration(
                default_ttl=settings.CACHE_DEFAULT_TTL,
                key_prefix=settings.CACHE_KEY_PREFIX,
                url=str(settings.CACHE_REDIS_URL),
            ),
        )
