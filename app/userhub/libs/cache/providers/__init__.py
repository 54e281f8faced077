from .memory import MemoryCacheProvider
from .redis import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]
