import json
import logging

from receipt_ledger.db.codec import decode_expenses, encode_expenses
from receipt_ledger.db.schema import init_db
from receipt_ledger.db.store import ExpenseStorage, KeyValueStore
from receipt_ledger.models import Category


def test_round_trip_is_lossless(sample_items):
    assert decode_expenses(encode_expenses(sample_items)) == sample_items


def test_encoding_is_plain_json(sample_items):
    rows = json.loads(encode_expenses(sample_items))
    assert rows[1] == {
        "id": "2",
        "date": "2024-01-01",
        "title": "soap",
        "amount": 200.0,
        "category": "Household",
    }


def test_absent_or_garbage_decodes_to_empty(caplog):
    assert decode_expenses(None) == []
    assert decode_expenses("") == []
    with caplog.at_level(logging.WARNING, logger="receipt_ledger.codec"):
        assert decode_expenses("{not json") == []
        assert decode_expenses('[{"id": "1"}]') == []
        assert decode_expenses('{"id": "1"}') == []
    assert "discarding unreadable expense data" in caplog.text


def test_duplicate_ids_are_dropped(sample_items):
    rows = json.loads(encode_expenses(sample_items))
    rows.append({**rows[0], "title": "dupe"})
    items = decode_expenses(json.dumps(rows))
    assert [e.id for e in items] == ["1", "2", "3"]
    assert items[0].title == "milk"


def test_storage_save_load_clear(tmp_path, sample_items):
    db_path = tmp_path / "kv.sqlite3"
    init_db(db_path)
    storage = ExpenseStorage(KeyValueStore(db_path), key="expenses")
    assert storage.load() == []
    storage.save(sample_items)
    loaded = storage.load()
    assert loaded == sample_items
    assert loaded[1].category is Category.HOUSEHOLD
    storage.clear()
    assert storage.load() == []


def test_key_value_store_overwrites(tmp_path):
    db_path = tmp_path / "kv.sqlite3"
    init_db(db_path)
    init_db(db_path)  # idempotent
    kv = KeyValueStore(db_path)
    kv.set_item("k", "one")
    kv.set_item("k", "two")
    assert kv.get_item("k") == "two"
    kv.remove_item("k")
    assert kv.get_item("k") is None


def test_invalid_records_are_skipped_individually(sample_items, caplog):
    rows = json.loads(encode_expenses(sample_items))
    rows.insert(1, {"id": "bad", "date": "not-a-date", "title": "x", "amount": 1, "category": "Food"})
    rows.append({**rows[0], "id": "4", "category": "Travel"})
    with caplog.at_level(logging.WARNING, logger="receipt_ledger.codec"):
        items = decode_expenses(json.dumps(rows))
    assert items == sample_items
    assert "index 1" in caplog.text and "index 4" in caplog.text
