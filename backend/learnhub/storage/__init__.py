"""JSON document persistence."""

from .exceptions import StorageError, StoreLoadError, StoreWriteError
from .json_store import JsonStore, StoreState


__all__ = ["JsonStore", "StorageError", "StoreLoadError", "StoreState", "StoreWriteError"]
