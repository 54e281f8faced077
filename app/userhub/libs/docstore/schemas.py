from dataclasses import dataclass, field
from typing import Any


@dataclass
class Document:
    """A stored document: the store-assigned id and its field data."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.data}


@dataclass
class MongoDocumentStoreConfiguration:
    uri: str = "mongodb://localhost:27017"
    database: str = "userhub"
    timeout_ms: int = 5000
