from typing import Any, Optional

from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from userhub.core.logging import get_logger
from userhub.libs.docstore.exceptions import DocumentStoreConnectionError
from userhub.libs.docstore.interface import DocumentStore
from userhub.libs.docstore.schemas import Document, MongoDocumentStoreConfiguration

logger = get_logger(__name__)


class MongoDocumentStore(DocumentStore):
    """
    MongoDB store on pymongo's asyncio client.

    Ids are ``ObjectId`` hex strings stored directly in ``_id`` so they travel
    through JSON and URLs unchanged.
    """

    def __init__(
        self,
        config: MongoDocumentStoreConfiguration,
        client: Optional[AsyncMongoClient] = None,
    ) -> None:
        self.config = config
        self._client = client or AsyncMongoClient(
            config.uri,
            serverSelectionTimeoutMS=config.timeout_ms,
            tz_aware=True,
        )
        self._db = self._client[config.database]

    @staticmethod
    def _to_document(raw: dict[str, Any]) -> Document:
        id = str(raw.pop("_id"))
        return Document(id=id, data=raw)

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        id = str(ObjectId())
        try:
            await self._db[collection].insert_one({**data, "_id": id})
        except PyMongoError as e:
            raise DocumentStoreConnectionError(f"Failed to insert into {collection}: {e!s}") from e
        return id

    async def get(self, collection: str, id: str) -> Document | None:
        try:
            raw = await self._db[collection].find_one({"_id": id})
        except PyMongoError as e:
            raise DocumentStoreConnectionError(f"Failed to read {collection}/{id}: {e!s}") from e
        return self._to_document(raw) if raw is not None else None

    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Document]:
        try:
            cursor = self._db[collection].find(filters or {})
            return [self._to_document(raw) async for raw in cursor]
        except PyMongoError as e:
            raise DocumentStoreConnectionError(f"Failed to query {collection}: {e!s}") from e

    async def update(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        try:
            result = await self._db[collection].update_one({"_id": id}, {"$set": data})
        except PyMongoError as e:
            raise DocumentStoreConnectionError(f"Failed to update {collection}/{id}: {e!s}") from e
        return result.matched_count > 0

    async def delete(self, collection: str, id: str) -> bool:
        try:
            result = await self._db[collection].delete_one({"_id": id})
        except PyMongoError as e:
            raise DocumentStoreConnectionError(f"Failed to delete {collection}/{id}: {e!s}") from e
        return result.deleted_count > 0

    async def health_check(self) -> bool:
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB health check failed: {e!s}")
            return False

    async def close(self) -> None:
        await self._client.close()
