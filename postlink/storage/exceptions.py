class StorageError(Exception):
    """Base exception for blob storage errors."""


class TransferError(StorageError):
    """Raised when file bytes cannot be written to blob storage."""
