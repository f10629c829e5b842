"""
Unit tests for the document stores.
"""

import pytest
import tempfile
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.document_store import InMemoryDocumentStore, JsonFileDocumentStore, StoreError


class TestInMemoryDocumentStore:
    """Tests for InMemoryDocumentStore."""

    def test_put_and_get(self):
        store = InMemoryDocumentStore()
        store.put_document("drafts", "schedule", {"schedule": [1, 2]})

        assert store.get_document("drafts", "schedule") == {"schedule": [1, 2]}
        assert store.get_document("drafts", "missing") is None

    def test_values_are_copied(self):
        store = InMemoryDocumentStore()
        value = {"schedule": []}
        store.put_document("drafts", "schedule", value)
        value["schedule"].append("changed")

        loaded = store.get_document("drafts", "schedule")
        loaded["schedule"].append("also changed")

        assert store.get_document("drafts", "schedule") == {"schedule": []}


class TestJsonFileDocumentStore:
    """Tests for JsonFileDocumentStore."""

    def test_round_trip_unicode(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileDocumentStore(Path(tmpdir))
            store.put_document("published", "current", {"name": "วันแม่แห่งชาติ"})

            assert (Path(tmpdir) / "published" / "current.json").exists()
            assert store.get_document("published", "current") == {"name": "วันแม่แห่งชาติ"}

    def test_overwrite(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileDocumentStore(Path(tmpdir))
            store.put_document("drafts", "schedule", {"v": 1})
            store.put_document("drafts", "schedule", {"v": 2})

            assert store.get_document("drafts", "schedule") == {"v": 2}
            assert list((Path(tmpdir) / "drafts").iterdir()) == [Path(tmpdir) / "drafts" / "schedule.json"]

    def test_missing_document(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileDocumentStore(Path(tmpdir))
            assert store.get_document("drafts", "schedule") is None

    def test_corrupt_document_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "drafts" / "schedule.json"
            path.parent.mkdir(parents=True)
            path.write_text("{not json", encoding="utf-8")

            with pytest.raises(StoreError):
                JsonFileDocumentStore(Path(tmpdir)).get_document("drafts", "schedule")

    def test_non_object_document_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "drafts" / "schedule.json"
            path.parent.mkdir(parents=True)
            path.write_text("[1, 2]", encoding="utf-8")

            with pytest.raises(StoreError):
                JsonFileDocumentStore(Path(tmpdir)).get_document("drafts", "schedule")

    def test_unserializable_value_raises_and_keeps_previous(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileDocumentStore(Path(tmpdir))
            store.put_document("drafts", "schedule", {"v": 1})

            with pytest.raises(StoreError):
                store.put_document("drafts", "schedule", {"v": object()})

            assert store.get_document("drafts", "schedule") == {"v": 1}

    def test_key_outside_collection_rejected(self):
        """Keys that would leave the collection directory are refused."""
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileDocumentStore(Path(tmpdir))

            with pytest.raises(StoreError):
                store.put_document("staffAccounts", "../drafts/schedule", {"password": "pw"})
            with pytest.raises(StoreError):
                store.get_document("staffAccounts", "a/b")
            with pytest.raises(StoreError):
                store.get_document("..", "schedule")

            assert not (Path(tmpdir) / "drafts" / "schedule.json").exists()
