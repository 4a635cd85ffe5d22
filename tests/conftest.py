"""
Pytest configuration and shared fixtures.
"""

import json
import math
import uuid
from types import SimpleNamespace

import pytest

from emojisync.config import Settings
from emojisync.models import OperationResult, SearchResult


def chat_response(content: str):
    """Build an object shaped like an OpenAI chat completion response."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeChatModel:
    """Chat model that replays canned replies and records every call."""

    def __init__(self, replies=None, reply_fn=None):
        self.replies = list(replies or [])
        self.reply_fn = reply_fn
        self.calls = []

    def invoke(self, messages, response_format=None):
        self.calls.append({"messages": messages, "response_format": response_format})
        if self.reply_fn is not None:
            return chat_response(self.reply_fn(messages))
        return chat_response(self.replies.pop(0))


def echo_list_reply(messages):
    """JSON list reply with one "<seed>: description" entry per seed in the prompt."""
    seeds = messages[-1]["content"].split(", ")
    return json.dumps({"list": [f"{seed}: description of {seed}" for seed in seeds]})


class InMemoryRecordStore:
    """Record store fake that keeps records in dicts and records every call."""

    def __init__(self, fail_batch_at=None, batch_error="batch rejected",
                 upsert_error=None, recompute_error=None):
        self.records = {}
        self.upsert_calls = []
        self.upsert_batch_calls = []
        self.search_calls = []
        self.recompute_calls = []
        self.fail_batch_at = fail_batch_at
        self.batch_error = batch_error
        self.upsert_error = upsert_error
        self.recompute_error = recompute_error
        self._next_key = 0

    def _assign_key(self):
        self._next_key += 1
        return f"k{self._next_key}"

    def upsert(self, collection, key, text):
        self.upsert_calls.append((collection, key, text))
        if self.upsert_error:
            return OperationResult(successful=False, error=self.upsert_error)
        key = key or self._assign_key()
        self.records.setdefault(collection, {})[key] = text
        return OperationResult(successful=True, status=f"Upserted record {key}")

    def upsert_batch(self, collection, keys, texts):
        self.upsert_batch_calls.append((collection, keys, list(texts)))
        if self.fail_batch_at == len(self.upsert_batch_calls):
            return OperationResult(successful=False, error=self.batch_error)
        for text in texts:
            self.records.setdefault(collection, {})[self._assign_key()] = text
        return OperationResult(successful=True, status=f"Upserted {len(texts)} records")

    def get_text(self, collection, key):
        return self.records.get(collection, {}).get(key, "")

    def get_texts(self, collection):
        return dict(self.records.get(collection, {}))

    def search(self, collection, method, query, top_k, return_text):
        self.search_calls.append((collection, method, query, top_k, return_text))
        return SearchResult(collection=collection, method=method, hits=[])

    def recompute_search_method(self, collection, method):
        self.recompute_calls.append((collection, method))
        if self.recompute_error:
            return OperationResult(successful=False, error=self.recompute_error)
        return OperationResult(successful=True, status=f"Recomputed {method}")


class LetterEmbedder:
    """Deterministic embedder: normalized letter histogram plus a bias term."""

    def __init__(self):
        self.calls = []

    def invoke(self, texts):
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            counts = [0.0] * 27
            for ch in text.lower():
                if "a" <= ch <= "z":
                    counts[ord(ch) - ord("a")] += 1.0
            counts[26] = 0.1
            norm = math.sqrt(sum(c * c for c in counts))
            vectors.append([c / norm for c in counts])
        return vectors


@pytest.fixture
def scratch_settings(tmp_path):
    """Settings pointing at a scratch collection and search method."""
    return Settings(
        OPENAI_API_KEY="",
        COLLECTION_NAME="scratch_emojis",
        SEARCH_METHOD="scratchMethod",
        SEARCH_METHOD_EMBEDDERS={"scratchMethod": "minilm"},
        GENERATE_CHUNK_SIZE=10,
        UPSERT_CHUNK_SIZE=50,
        RECORDS_DB_PATH=str(tmp_path / "records.db"),
        CHROMADB_PATH="",
    )


@pytest.fixture
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture
def unique_collection():
    """Collection name unique per test; ephemeral chroma clients share state."""
    return f"c{uuid.uuid4().hex[:12]}"


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
