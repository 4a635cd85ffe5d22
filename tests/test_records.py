"""
Tests for single-record insert and update.
"""

import pytest

from emojisync.exceptions import StoreOperationError
from emojisync.generation import TextGenerator
from emojisync.records import ALREADY_EXISTS, DESCRIBE_INSTRUCTION, MISMATCH, RecordWorkflow
from conftest import FakeChatModel, InMemoryRecordStore

COLLECTION = "scratch_emojis"


@pytest.fixture
def store():
    store = InMemoryRecordStore()
    store.records[COLLECTION] = {
        "k-apple": "🍎 red apple",
        "k-cry": "😭: sobbing face",
        "k-a": "A: letter a",
    }
    return store


@pytest.fixture
def chat():
    return FakeChatModel(replies=["A bright yellow star.  "])


@pytest.fixture
def workflow(store, chat, scratch_settings):
    return RecordWorkflow(TextGenerator(chat), store, scratch_settings)


class TestInsert:
    """Test cases for RecordWorkflow.insert."""

    def test_existing_emoji_is_a_soft_status(self, workflow, store, chat):
        assert workflow.insert("🍎") == ALREADY_EXISTS
        assert store.upsert_calls == []
        assert chat.calls == []

    def test_dedup_uses_emoji_of_candidate_text(self, workflow, store):
        assert workflow.insert("😭 something else entirely") == ALREADY_EXISTS
        assert store.upsert_calls == []

    def test_new_emoji_is_described_and_upserted(self, workflow, store, chat):
        status = workflow.insert("⭐")

        assert status.startswith("Upserted record")
        assert store.upsert_calls == [(COLLECTION, None, "⭐ A bright yellow star.")]
        assert chat.calls[0]["messages"] == [
            {"role": "system", "content": DESCRIBE_INSTRUCTION},
            {"role": "user", "content": "⭐"},
        ]

    def test_description_is_requested_for_emoji_only(self, workflow, chat):
        workflow.insert("⭐ with trailing words")
        assert chat.calls[0]["messages"][1]["content"] == "⭐"

    def test_empty_collection_inserts(self, chat, scratch_settings):
        store = InMemoryRecordStore()
        workflow = RecordWorkflow(TextGenerator(chat), store, scratch_settings)

        workflow.insert("⭐")
        assert len(store.upsert_calls) == 1

    def test_store_failure_raises_with_store_error(self, chat, scratch_settings):
        store = InMemoryRecordStore(upsert_error="database is locked")
        workflow = RecordWorkflow(TextGenerator(chat), store, scratch_settings)

        with pytest.raises(StoreOperationError) as exc_info:
            workflow.insert("⭐")
        assert str(exc_info.value) == "database is locked"
        assert exc_info.value.error == "database is locked"


class TestUpdate:
    """Test cases for RecordWorkflow.update."""

    def test_mismatch_is_a_soft_status(self, workflow, store):
        assert workflow.update("k-apple", "🍌", "yellow banana") == MISMATCH
        assert store.upsert_calls == []

    def test_unknown_key_is_a_mismatch(self, workflow, store):
        assert workflow.update("missing", "🍎", "red apple") == MISMATCH
        assert store.upsert_calls == []

    def test_unknown_key_with_empty_emoji_is_a_mismatch(self, workflow, store):
        assert workflow.update("ghost", "", "nothing here") == MISMATCH
        assert store.upsert_calls == []
        assert "ghost" not in store.records[COLLECTION]

    def test_empty_emoji_on_existing_key_is_a_mismatch(self, workflow, store):
        assert workflow.update("k-apple", "", "no emoji") == MISMATCH
        assert store.upsert_calls == []

    def test_match_overwrites_same_key(self, workflow, store):
        status = workflow.update("k-apple", "🍎", "green apple")

        assert status == "Upserted record k-apple"
        assert store.upsert_calls == [(COLLECTION, "k-apple", "🍎: green apple")]
        assert store.records[COLLECTION]["k-apple"] == "🍎: green apple"

    def test_bmp_emoji_match(self, workflow, store):
        workflow.update("k-a", "A", "first letter")
        assert store.upsert_calls == [(COLLECTION, "k-a", "A: first letter")]

    def test_store_failure_raises(self, scratch_settings, chat):
        store = InMemoryRecordStore(upsert_error="readonly database")
        store.records[COLLECTION] = {"k": "🍎 red apple"}
        workflow = RecordWorkflow(TextGenerator(chat), store, scratch_settings)

        with pytest.raises(StoreOperationError, match="readonly database"):
            workflow.update("k", "🍎", "apple")


class TestGetToken:
    """Test cases for RecordWorkflow.get_token."""

    def test_round_trip(self, workflow, store):
        status = workflow.store.upsert(COLLECTION, "k-new", "🍎 red apple")
        assert status.successful
        assert workflow.get_token("k-new") == "🍎"

    def test_missing_key(self, workflow):
        assert workflow.get_token("missing") == ""
