from typing import Any

from userhub.libs.docstore import Document, DocumentStore


class BaseRepository:
    """
    Base repository providing CRUD operations over one collection of a document store.

    Store faults are not caught here; they reach the service unchanged.
    """

    def __init__(self, collection: str, store: DocumentStore):
        self.collection = collection
        self.store = store

    async def find_all(self) -> list[Document]:
        return await self.store.find(self.collection)

    async def find_by(self, **filters: Any) -> list[Document]:
        """
        Find records whose fields equal every given value.

        Args:
            **filters: Field names and values to filter by

        Returns:
            Every matching record, possibly none
        """
        return await self.store.find(self.collection, filters)

    async def find_one_by_id(self, id: str) -> Document | None:
        return await self.store.get(self.collection, id)

    async def create(self, data: dict[str, Any]) -> str:
        """
        Persist a new record.

        Returns:
            str: The id assigned by the store
        """
        return await self.store.add(self.collection, data)

    async def update(self, id: str, data: dict[str, Any]) -> bool:
        return await self.store.update(self.collection, id, data)

    async def delete(self, id: str) -> bool:
        return await self.store.delete(self.collection, id)
