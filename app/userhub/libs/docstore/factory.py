from userhub.core.config import settings
from userhub.core.logging import get_logger
from userhub.libs.docstore.exceptions import DocumentStoreConfigurationError
from userhub.libs.docstore.interface import DocumentStore
from userhub.libs.docstore.providers.memory import MemoryDocumentStore
from userhub.libs.docstore.providers.mongo import MongoDocumentStore
from userhub.libs.docstore.schemas import MongoDocumentStoreConfiguration

logger = get_logger(__name__)


class DocumentStoreFactory:
    """
    Factory for creating the document store selected by ``DOCSTORE_BACKEND``.
    """

    @classmethod
    def create_store(cls, backend: str) -> DocumentStore:
        """
        Raises:
            DocumentStoreConfigurationError: If the backend is not supported
        """
        if backend == "memory":
            return MemoryDocumentStore()

        if backend == "mongo":
            return MongoDocumentStore(
                MongoDocumentStoreConfiguration(
                    uri=settings.MONGO_URI,
                    database=settings.MONGO_DB,
                    timeout_ms=settings.MONGO_TIMEOUT_MS,
                )
            )

        raise DocumentStoreConfigurationError(f"Unsupported document store backend: {backend}")

    @classmethod
    def get_configured_store(cls) -> DocumentStore:
        logger.info(f"Creating document store: {settings.DOCSTORE_BACKEND} for environment: {settings.ENVIRONMENT}")
        return cls.create_store(settings.DOCSTORE_BACKEND)
