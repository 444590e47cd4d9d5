"""
SQLite-backed user and order store.

Key properties:
- Implements both UserStore and OrderStore
- One connection per operation; nothing is shared between requests
- Order reads and writes are always scoped by user_id
- sqlite3 errors surface as StorageError, never as raw driver exceptions

Schema:
- users(id, email UNIQUE, password_hash, created_at)
- orders(id, user_id -> users.id, preference CHECK(...), address, pickup_time, created_at)
- timestamps are RFC 3339 text with offset
"""

import logging
import sqlite3
from contextlib import closing
from typing import List, Optional

from ordering.models import Preference
from ordering.timestamps import parse_rfc3339, to_rfc3339, utc_now
from ordering.validation import OrderInput
from storage.base import OrderStore, StorageError, UserStore
from storage.types import OrderRecord, UserRecord

logger = logging.getLogger(__name__)

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    preference TEXT NOT NULL CHECK (preference IN {Preference.values()!r}),
    address TEXT,
    pickup_time TEXT,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_orders_user_id ON orders(user_id);
"""

_ORDER_COLUMNS = "id, user_id, preference, address, pickup_time, created_at"


def _row_to_order(row: sqlite3.Row) -> OrderRecord:
    return OrderRecord(
        id=row["id"],
        user_id=row["user_id"],
        preference=Preference(row["preference"]),
        address=row["address"],
        pickup_time=parse_rfc3339(row["pickup_time"]) if row["pickup_time"] else None,
        created_at=parse_rfc3339(row["created_at"]),
    )


def _row_to_user(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=parse_rfc3339(row["created_at"]),
    )


class SQLiteStore(UserStore, OrderStore):
    """
    SQLite implementation of the user and order stores.

    Pure plumbing: the HTTP layer never sees SQL or sqlite3 types.
    """

    def __init__(self, db_path: str):
        """
        Initialize the store and create the schema if missing.

        Args:
            db_path: Path to SQLite database file. Every operation opens its
                     own connection, so ':memory:' would lose the schema.
        """
        self.db_path = db_path
        self._initialize_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _initialize_db(self) -> None:
        try:
            with closing(self._connect()) as conn:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.executescript(_SCHEMA)
                conn.commit()
            logger.debug(f"SQLite store initialized: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize SQLite store: {str(e)}")
            raise StorageError(f"Failed to initialize store: {str(e)}") from e

    # ── Users ────────────────────────────────────────────────────────────────

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT id, email, password_hash, created_at FROM users WHERE id = ?",
                    (user_id,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during get_user: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
                    (email,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during get_user_by_email: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_user(row) if row else None

    def upsert_user(self, email: str, password_hash: str) -> UserRecord:
        try:
            with closing(self._connect()) as conn:
                conn.execute(
                    """
                    INSERT INTO users (email, password_hash, created_at) VALUES (?, ?, ?)
                    ON CONFLICT(email) DO UPDATE SET password_hash = excluded.password_hash
                    """,
                    (email, password_hash, to_rfc3339(utc_now())),
                )
                conn.commit()
                row = conn.execute(
                    "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
                    (email,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during upsert_user: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_user(row)

    # ── Orders ───────────────────────────────────────────────────────────────

    def create_order(self, user_id: int, order: OrderInput) -> OrderRecord:
        try:
            with closing(self._connect()) as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO orders (user_id, preference, address, pickup_time, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        order.preference.value,
                        order.address,
                        to_rfc3339(order.pickup_time) if order.pickup_time else None,
                        to_rfc3339(utc_now()),
                    ),
                )
                conn.commit()
                row = conn.execute(
                    f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = ?",
                    (cursor.lastrowid,),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during create_order: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_order(row)

    def list_orders(self, user_id: int) -> List[OrderRecord]:
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    f"""
                    SELECT {_ORDER_COLUMNS} FROM orders
                    WHERE user_id = ?
                    ORDER BY created_at DESC, id DESC
                    """,
                    (user_id,),
                ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during list_orders: {str(e)}")
            raise StorageError(str(e)) from e
        return [_row_to_order(row) for row in rows]

    def get_order(self, order_id: int, user_id: int) -> Optional[OrderRecord]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = ? AND user_id = ?",
                    (order_id, user_id),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during get_order: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_order(row) if row else None

    def update_order(self, order_id: int, user_id: int, order: OrderInput) -> Optional[OrderRecord]:
        try:
            with closing(self._connect()) as conn:
                cursor = conn.execute(
                    """
                    UPDATE orders SET preference = ?, address = ?, pickup_time = ?
                    WHERE id = ? AND user_id = ?
                    """,
                    (
                        order.preference.value,
                        order.address,
                        to_rfc3339(order.pickup_time) if order.pickup_time else None,
                        order_id,
                        user_id,
                    ),
                )
                conn.commit()
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(
                    f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = ? AND user_id = ?",
                    (order_id, user_id),
                ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during update_order: {str(e)}")
            raise StorageError(str(e)) from e
        return _row_to_order(row)
