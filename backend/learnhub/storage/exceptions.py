"""Custom exceptions for the storage module."""


class StorageError(Exception):
    """Base exception for storage operations."""


class StoreLoadError(StorageError):
    """Raised when the data file cannot be read or parsed."""


class StoreWriteError(StorageError):
    """Raised when the data file cannot be written."""
