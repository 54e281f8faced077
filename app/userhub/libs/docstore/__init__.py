from .exceptions import DocumentStoreConfigurationError, DocumentStoreConnectionError, DocumentStoreError  # noqa: F401
from .factory import DocumentStoreFactory  # noqa: F401
from .interface import DocumentStore  # noqa: F401
from .schemas import Document, MongoDocumentStoreConfiguration  # noqa: F401
