from .memory import MemoryDocumentStore
from .mongo import MongoDocumentStore

__all__ = ["MemoryDocumentStore", "MongoDocumentStore"]
