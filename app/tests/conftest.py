from collections import Counter
from typing import Any, Optional

import pytest
from userhub.domain.services import SecurityService
from userhub.libs.cache import CacheConnectionError, CacheProvider, CacheResponse, CacheService, MemoryCacheConfiguration
from userhub.libs.cache.providers.memory import MemoryCacheProvider
from userhub.libs.docstore import Document
from userhub.libs.docstore.providers import MemoryDocumentStore

TEST_SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"


class CountingDocumentStore(MemoryDocumentStore):
    """Memory store that records every read and write per collection."""

    def __init__(self) -> None:
        super().__init__()
        self.reads: Counter[str] = Counter()
        self.writes: Counter[str] = Counter()

    async def get(self, collection: str, id: str) -> Document | None:
        self.reads[collection] += 1
        return await super().get(collection, id)

    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Document]:
        self.reads[collection] += 1
        return await super().find(collection, filters)

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        self.writes[collection] += 1
        return await super().add(collection, data)

    async def update(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        self.writes[collection] += 1
        return await super().update(collection, id, data)

    async def delete(self, collection: str, id: str) -> bool:
        self.writes[collection] += 1
        return await super().delete(collection, id)


class UnreachableCacheProvider(CacheProvider):
    """Cache provider whose backend is always down."""

    def __init__(self) -> None:
        super().__init__(MemoryCacheConfiguration())

    async def get(self, key: str) -> CacheResponse:
        raise CacheConnectionError("cache is down")

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheResponse:
        raise CacheConnectionError("cache is down")

    async def delete(self, key: str) -> CacheResponse:
        raise CacheConnectionError("cache is down")

    async def exists(self, key: str) -> bool:
        raise CacheConnectionError("cache is down")

    async def ttl(self, key: str) -> Optional[int]:
        raise CacheConnectionError("cache is down")

    async def clear(self) -> CacheResponse:
        raise CacheConnectionError("cache is down")

    async def health_check(self) -> bool:
        raise CacheConnectionError("cache is down")


@pytest.fixture
def store() -> CountingDocumentStore:
    return CountingDocumentStore()


@pytest.fixture
def cache_service() -> CacheService:
    return CacheService(provider=MemoryCacheProvider(MemoryCacheConfiguration(key_prefix="test")))


@pytest.fixture
def unreachable_cache_service() -> CacheService:
    return CacheService(provider=UnreachableCacheProvider())


@pytest.fixture
def security() -> SecurityService:
    return SecurityService(secret_key=TEST_SECRET_KEY)
