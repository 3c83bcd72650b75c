"""Exceptions raised by the upload ingestor."""


class IngestError(Exception):
    """Base class for every failed ingestion."""
    pass


class EmptyInputError(IngestError):
    """Raised when the upload has no stream or no content."""
    pass


class StorageUnavailableError(IngestError):
    """Raised when the storage area cannot be created or accessed."""
    pass


class WriteFailedError(IngestError):
    """Raised when copying the stream fails. The partial object is already removed."""
    pass


class KeyCollisionError(IngestError):
    """Raised when the generated key already exists in the storage area."""
    pass
