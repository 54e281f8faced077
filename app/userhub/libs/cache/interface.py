import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from userhub.libs.cache.exceptions import CacheKeyError, CacheSerializationError
from userhub.libs.cache.schemas import CacheConfiguration, CacheResponse


class CacheProvider(ABC):
    """
    Base abstract class for all cache providers.

    Providers store JSON text under ``<key_prefix>:<key>``. Expected failures
    (bad keys, unserializable values) come back as ``CacheResponse(success=False)``;
    backend faults such as lost connections are raised.
    """

    def __init__(self, config: CacheConfiguration) -> None:
        self.config = config

    @abstractmethod
    async def get(self, key: str) -> CacheResponse:
        """
        Get a value from the cache.

        Returns:
            CacheResponse: ``from_cache`` is False and ``value`` None on a miss
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        """
        Set a value in the cache.

        Args:
            key (str): The cache key
            value (Any): A JSON-serializable value
            ttl (Optional[int]): Time to live in seconds, defaults to ``config.default_ttl``.
                A ttl of zero or less stores the value without expiry.
        """

    @abstractmethod
    async def delete(self, key: str) -> CacheResponse:
        """Delete a value. Deleting a missing key succeeds."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def ttl(self, key: str) -> Optional[int]:
        """
        Remaining time to live in seconds.

        Returns:
            Optional[int]: None if the key doesn't exist, -1 if it has no expiry
        """

    @abstractmethod
    async def clear(self) -> CacheResponse:
        """Remove every key under the configured prefix."""

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def close(self) -> None:
        pass

    def _build_key(self, key: str) -> str:
        return f"{self.config.key_prefix}:{key}"

    def _validate_key(self, key: str) -> None:
        if not key or not isinstance(key, str):
            raise CacheKeyError("Cache key must be a non-empty string")

        if len(key) > 250:
            raise CacheKeyError("Cache key must be 250 characters or less")

        if any(char in key for char in (" ", "\n", "\r", "\t")):
            raise CacheKeyError("Cache key cannot contain spaces or newline characters")

    def _serialize_value(self, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize value: {e!s}") from e

    def _deserialize_value(self, serialized: str) -> Any:
        try:
            return json.loads(serialized)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to deserialize value: {e!s}") from e
