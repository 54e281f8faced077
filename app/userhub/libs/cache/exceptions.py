class CacheError(Exception):
    """Base exception for cache operations."""

    def __init__(self, message: str = "Cache operation failed") -> None:
        super().__init__(message)
        self.message = message


class CacheConnectionError(CacheError):
    """Raised when the cache backend cannot be reached."""

    def __init__(self, message: str = "Failed to connect to cache") -> None:
        super().__init__(message)


class CacheSerializationError(CacheError):
    """Raised when a value cannot be encoded to or decoded from JSON."""

    def __init__(self, message: str = "Cache serialization failed") -> None:
        super().__init__(message)


class CacheKeyError(CacheError):
    """Raised when a cache key is invalid."""

    def __init__(self, message: str = "Invalid cache key") -> None:
        super().__init__(message)


class CacheConfigurationError(CacheError):
    """Raised when the cache provider cannot be built from settings."""

    def __init__(self, message: str = "Invalid cache configuration") -> None:
        super().__init__(message)
