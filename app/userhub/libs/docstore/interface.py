from abc import ABC, abstractmethod
from typing import Any

from userhub.libs.docstore.schemas import Document


class DocumentStore(ABC):
    """
    Base abstract class for document stores.

    Documents live in named collections and are addressed by a string id the
    store assigns on ``add``. Writes are atomic per document only; nothing here
    offers transactions or unique constraints.
    """

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """
        Persist a new document.

        Returns:
            str: The id assigned by the store
        """

    @abstractmethod
    async def get(self, collection: str, id: str) -> Document | None:
        pass

    @abstractmethod
    async def find(self, collection: str, filters: dict[str, Any] | None = None) -> list[Document]:
        """
        Find documents whose fields equal every value in ``filters``.

        An empty or missing ``filters`` returns the whole collection.
        """

    @abstractmethod
    async def update(self, collection: str, id: str, data: dict[str, Any]) -> bool:
        """
        Merge ``data`` into an existing document.

        Returns:
            bool: False if the document doesn't exist
        """

    @abstractmethod
    async def delete(self, collection: str, id: str) -> bool:
        """
        Returns:
            bool: False if the document doesn't exist
        """

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def close(self) -> None:
        pass
