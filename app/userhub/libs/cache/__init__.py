from .exceptions import CacheConfigurationError, CacheConnectionError, CacheError, CacheKeyError, CacheSerializationError
from .factory import CacheFactory
from .interface import CacheProvider
from .schemas import CacheConfiguration, CacheItem, CacheResponse, MemoryCacheConfiguration, RedisCacheConfiguration
from .service import CacheService, get_cache_service, setup_cache, teardown_cache

__all__ = [
    # Core classes
    "CacheFactory",
    "CacheProvider",
    "CacheService",
    # Lifecycle
    "get_cache_service",
    "setup_cache",
    "teardown_cache",
    # Schemas
    "CacheConfiguration",
    "MemoryCacheConfiguration",
    "RedisCacheConfiguration",
    "CacheResponse",
    "CacheItem",
    # Exceptions
    "CacheError",
    "CacheConfigurationError",
    "CacheConnectionError",
    "CacheSerializationError",
    "CacheKeyError",
]
