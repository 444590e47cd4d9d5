"""
Tests for SQLiteStore.

Verifies:
✔ Users: upsert creates then replaces the password hash
✔ Orders: create / list / get / update
✔ Every order operation is scoped by owner
✔ Data survives a new store instance on the same file
✔ sqlite3 failures surface as StorageError
"""

import sqlite3
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from ordering.models import Preference
from ordering.validation import OrderInput
from storage import SQLiteStore, StorageError

PICKUP = datetime(2030, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def alice(store):
    return store.upsert_user("alice@example.com", "hash-a")


@pytest.fixture
def bob(store):
    return store.upsert_user("bob@example.com", "hash-b")


class TestUsers:
    def test_upsert_creates_user(self, store):
        user = store.upsert_user("user@weel.com", "hash-1")

        assert user.id >= 1
        assert user.email == "user@weel.com"
        assert user.password_hash == "hash-1"
        assert user.created_at.tzinfo is not None

    def test_upsert_replaces_hash_and_keeps_id(self, store):
        first = store.upsert_user("user@weel.com", "hash-1")
        second = store.upsert_user("user@weel.com", "hash-2")

        assert second.id == first.id
        assert second.password_hash == "hash-2"

    def test_lookup_by_id_and_email(self, store, alice):
        assert store.get_user(alice.id) == alice
        assert store.get_user_by_email("alice@example.com") == alice
        assert store.get_user(9999) is None
        assert store.get_user_by_email("nobody@example.com") is None


class TestOrders:
    def test_create_in_store(self, store, alice):
        record = store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))

        assert record.id >= 1
        assert record.user_id == alice.id
        assert record.preference is Preference.IN_STORE
        assert record.address is None
        assert record.pickup_time is None

    def test_create_delivery_round_trips_fields(self, store, alice):
        created = store.create_order(
            alice.id,
            OrderInput(preference=Preference.DELIVERY, address="1 Market St", pickup_time=PICKUP),
        )

        fetched = store.get_order(created.id, alice.id)

        assert fetched == created
        assert fetched.pickup_time == PICKUP

    def test_list_is_newest_first(self, store, alice):
        first = store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))
        second = store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))

        assert [o.id for o in store.list_orders(alice.id)] == [second.id, first.id]

    def test_list_is_scoped_by_owner(self, store, alice, bob):
        store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))

        assert store.list_orders(bob.id) == []
        assert len(store.list_orders(alice.id)) == 1

    def test_get_other_users_order_is_none(self, store, alice, bob):
        record = store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))

        assert store.get_order(record.id, bob.id) is None

    def test_update_replaces_fields(self, store, alice):
        record = store.create_order(
            alice.id,
            OrderInput(preference=Preference.DELIVERY, address="1 Market St", pickup_time=PICKUP),
        )

        updated = store.update_order(record.id, alice.id, OrderInput(preference=Preference.IN_STORE))

        assert updated.id == record.id
        assert updated.preference is Preference.IN_STORE
        assert updated.address is None
        assert updated.pickup_time is None
        assert updated.created_at == record.created_at

    def test_update_other_users_order_is_none(self, store, alice, bob):
        record = store.create_order(alice.id, OrderInput(preference=Preference.IN_STORE))

        result = store.update_order(
            record.id, bob.id, OrderInput(preference=Preference.CURBSIDE, address="Lot B", pickup_time=PICKUP)
        )

        assert result is None
        assert store.get_order(record.id, alice.id).preference is Preference.IN_STORE

    def test_update_missing_order_is_none(self, store, alice):
        assert store.update_order(404, alice.id, OrderInput(preference=Preference.IN_STORE)) is None

    def test_record_to_facts(self, store, alice):
        record = store.create_order(
            alice.id,
            OrderInput(preference=Preference.CURBSIDE, address="Lot B", pickup_time=PICKUP),
        )

        facts = record.to_facts()

        assert facts.id == record.id
        assert facts.preference is Preference.CURBSIDE
        assert facts.address == "Lot B"
        assert facts.pickup_time == PICKUP
        assert facts.created_at == record.created_at


class TestPersistence:
    def test_data_survives_new_instance(self, temp_db):
        first = SQLiteStore(db_path=temp_db)
        user = first.upsert_user("user@weel.com", "hash")
        order = first.create_order(user.id, OrderInput(preference=Preference.IN_STORE))

        second = SQLiteStore(db_path=temp_db)

        assert second.get_order(order.id, user.id) == order

    def test_unknown_preference_rejected_by_schema(self, store, alice):
        conn = sqlite3.connect(store.db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO orders (user_id, preference, created_at) VALUES (?, ?, ?)",
                    (alice.id, "TELEPORT", "2025-01-01T00:00:00Z"),
                )
        finally:
            conn.close()


class TestErrors:
    def test_unopenable_path_raises_storage_error(self, tmp_path):
        with pytest.raises(StorageError):
            SQLiteStore(db_path=str(tmp_path / "missing-dir" / "orders.db"))

    def test_driver_error_is_wrapped(self, store, alice):
        with patch.object(store, "_connect", side_effect=sqlite3.OperationalError("database is locked")):
            with pytest.raises(StorageError, match="database is locked"):
                store.list_orders(alice.id)
