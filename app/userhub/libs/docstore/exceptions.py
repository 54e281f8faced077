class DocumentStoreError(Exception):
    """Base exception for document store operations."""

    def __init__(self, message: str = "Document store operation failed") -> None:
        super().__init__(message)
        self.message = message


class DocumentStoreConnectionError(DocumentStoreError):
    """Raised when the store cannot be reached or a command fails in transit."""

    def __init__(self, message: str = "Failed to reach the document store") -> None:
        super().__init__(message)


class DocumentStoreConfigurationError(DocumentStoreError):
    """Raised when the document store cannot be built from settings."""

    def __init__(self, message: str = "Invalid document store configuration") -> None:
        super().__init__(message)
