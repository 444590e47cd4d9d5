"""
Abstract store interfaces.

The HTTP layer depends only on these interfaces, not on SQLite.

Every order lookup is scoped by owner: a record that exists but belongs to
someone else is indistinguishable from a missing one.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ordering.validation import OrderInput
from storage.types import OrderRecord, UserRecord


class StorageError(Exception):
    """The backing store failed (locked, missing, corrupted, ...)."""
    pass


class UserStore(ABC):

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        raise NotImplementedError

    @abstractmethod
    def upsert_user(self, email: str, password_hash: str) -> UserRecord:
        """Create the user, or replace the password hash if the email exists."""
        raise NotImplementedError


class OrderStore(ABC):

    @abstractmethod
    def create_order(self, user_id: int, order: OrderInput) -> OrderRecord:
        raise NotImplementedError

    @abstractmethod
    def list_orders(self, user_id: int) -> List[OrderRecord]:
        """All orders of user_id, newest first."""
        raise NotImplementedError

    @abstractmethod
    def get_order(self, order_id: int, user_id: int) -> Optional[OrderRecord]:
        raise NotImplementedError

    @abstractmethod
    def update_order(self, order_id: int, user_id: int, order: OrderInput) -> Optional[OrderRecord]:
        """Replace preference, address and pickup time. None if not found/not owned."""
        raise NotImplementedError
