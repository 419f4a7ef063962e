"""SQLAlchemy record store against an in-memory SQLite database."""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from catalog.domain import Item
from catalog.errors import StoreError

from conftest import make_candidate

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_save_then_lookup_by_name_and_id(record_store):
    item = Item.new(make_candidate("Widget", price=Decimal("12.50")), item_id="abc", now=NOW)

    saved = record_store.save(item)

    assert saved == item
    assert record_store.find_by_name("Widget") == item
    assert record_store.get("abc") == item
    assert record_store.count() == 1


def test_lookups_return_none_when_absent(record_store):
    assert record_store.find_by_name("missing") is None
    assert record_store.get("missing") is None
    assert record_store.count() == 0


def test_name_lookup_is_exact(record_store):
    record_store.save(Item.new(make_candidate("Widget"), now=NOW))

    assert record_store.find_by_name("widget") is None
    assert record_store.find_by_name("Widget ") is None


def test_unique_name_enforced_by_database(record_store):
    record_store.save(Item.new(make_candidate("Widget"), now=NOW))

    with pytest.raises(StoreError) as excinfo:
        record_store.save(Item.new(make_candidate("Widget"), now=NOW))

    assert excinfo.value.store == "record_store"
    assert excinfo.value.operation == "save"
    assert record_store.count() == 1


def test_timestamps_come_back_timezone_aware(record_store):
    record_store.save(Item.new(make_candidate("Widget"), item_id="abc", now=NOW))

    loaded = record_store.get("abc")

    assert loaded.created_at == NOW
    assert loaded.created_at.tzinfo is not None
