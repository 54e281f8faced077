from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class CacheConfiguration:
    """Base cache configuration."""

    default_ttl: int = 3600  # 1 hour
    key_prefix: str = "userhub_cache"


@dataclass
class MemoryCacheConfiguration(CacheConfiguration):
    """In-process cache configuration."""

    max_size: int = 1000


@dataclass
class RedisCacheConfiguration(CacheConfiguration):
    """Redis cache configuration."""

    url: str = "redis://localhost:6379/1"
    socket_timeout: int = 5
    socket_connect_timeout: int = 5
    health_check_interval: int = 30
    max_connections: int = 10


@dataclass
class CacheItem:
    """Serialized value with its absolute expiry."""

    value: str
    created_at: float
    expires_at: Optional[float] = None


@dataclass
class CacheResponse:
    """Result of a single provider call."""

    success: bool
    value: Any = None
    error: Optional[str] = None
    from_cache: bool = False
