"""
Storage module exports.
"""

from storage.base import OrderStore, StorageError, UserStore
from storage.sqlite import SQLiteStore
from storage.types import OrderRecord, UserRecord

__all__ = [
    "OrderStore",
    "StorageError",
    "UserStore",
    "SQLiteStore",
    "OrderRecord",
    "UserRecord",
]
