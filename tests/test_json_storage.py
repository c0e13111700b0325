"""
Tests for the JSON-file user store against a temporary directory.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

# Make the user_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_api.repositories.json_storage import JsonUserStore, StorageError  # noqa: E402


@pytest.fixture()
def store_file(tmp_path):
    return tmp_path / "users.json"


def test_missing_file_is_created_empty(store_file):
    store = JsonUserStore(store_file)
    assert store.load() == []
    assert store_file.exists()
    assert json.loads(store_file.read_text(encoding="utf-8")) == []


def test_save_writes_pretty_printed_array(store_file):
    store = JsonUserStore(store_file)
    users = [
        {"id": 1, "name": "Ada", "email": "ada@x.io", "age": None},
        {"id": 2, "name": "José", "email": "jose@x.io", "age": 40},
    ]
    store.save(users)
    text = store_file.read_text(encoding="utf-8")
    assert text == json.dumps(users, ensure_ascii=False, indent=2)
    assert store.load() == users


def test_corrupt_file_degrades_to_empty_list(store_file, caplog):
    store_file.write_text("{not json", encoding="utf-8")
    store = JsonUserStore(store_file)
    with caplog.at_level(logging.ERROR):
        assert store.load() == []
    assert "Error reading users file" in caplog.text
    with pytest.raises(StorageError):
        store.read_users()


@pytest.mark.parametrize("document", ['{"id": 1}', "[1, 2]", '"users"'])
def test_non_array_documents_are_rejected(store_file, document):
    store_file.write_text(document, encoding="utf-8")
    store = JsonUserStore(store_file)
    with pytest.raises(StorageError):
        store.read_users()
    assert store.load() == []


def test_failed_write_is_logged_not_raised(tmp_path, caplog):
    store = JsonUserStore(tmp_path / "missing-dir" / "users.json")
    with caplog.at_level(logging.ERROR):
        store.save([{"id": 1}])
    assert "Error writing to users file" in caplog.text
    with pytest.raises(StorageError):
        store.write_users([{"id": 1}])


def test_transaction_persists_on_success(store_file):
    store = JsonUserStore(store_file)
    with store.transaction() as users:
        users.append({"id": 1, "name": "Ada", "email": "ada@x.io", "age": None})
    assert [u["id"] for u in store.load()] == [1]


def test_transaction_leaves_file_untouched_on_error(store_file):
    store = JsonUserStore(store_file)
    store.save([{"id": 1, "name": "Ada", "email": "ada@x.io", "age": None}])
    before = store_file.read_text(encoding="utf-8")

    with pytest.raises(RuntimeError):
        with store.transaction() as users:
            users.clear()
            raise RuntimeError("boom")

    assert store_file.read_text(encoding="utf-8") == before


def test_strict_transaction_propagates_parse_errors(store_file):
    store_file.write_text("garbage", encoding="utf-8")
    store = JsonUserStore(store_file)
    with pytest.raises(StorageError):
        with store.transaction(strict=True):
            pass
    assert store_file.read_text(encoding="utf-8") == "garbage"


@pytest.mark.parametrize(
    "records",
    [
        [{"id": "abc", "name": "Ada", "email": "ada@x.io", "age": None}],
        [{"name": "Ada", "email": "ada@x.io"}],
        [{"id": 1.5}],
        [{"id": True}],
    ],
)
def test_records_without_integer_id_are_rejected(store_file, records):
    store_file.write_text(json.dumps(records), encoding="utf-8")
    store = JsonUserStore(store_file)
    with pytest.raises(StorageError):
        store.read_users()
    assert store.load() == []
