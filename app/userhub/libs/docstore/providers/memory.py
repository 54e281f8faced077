import copy
import uuid
from typing import Any

from userhub.libs.docstore.interface import DocumentStore
from userhub.libs.docstore.schemas import Document


class MemoryDocumentStore(DocumentStore):
    """
    Dictionary-backed store for local runs and tests.

    Data is deep-copied on the way in and out so callers can never mutate
    stored state by holding on to a returned dict.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        id = uuid.uuid4().hex
        self._collection(collection)[id] = copy.deepcopy(data)
        return id

    async def get(self, collection: str, id: str) -> Document | None:
        data = self._collection(collection).get(id)
        if data is None:
            return None
        return Document(id=id, data=copy.deepcopy(data))

    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Document]:
        filters = filters or {}
        return [
            Document(id=id, data=copy.deepcopy(data))
            for id, data in self._collection(collection).items()
            if all(field in data and data[field] == value for field, value in filters.items())
        ]

    async def update(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        stored = self._collection(collection).get(id)
        if stored is None:
            return False
        stored.update(copy.deepcopy(data))
        return True

    async def delete(self, collection: str, id: str) -> bool:
        return self._collection(collection).pop(id, None) is not None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._collections.clear()
