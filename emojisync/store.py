"""Record store: SQLite for record text, ChromaDB for the search index.

Records are written to SQLite only. The vector index for a search method is
a separate chroma collection that is rebuilt from the record table when
``recompute_search_method`` is called; writes never update it.
"""
import re
import sqlite3
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from emojisync.embeddings import EmbeddingModel
from emojisync.exceptions import InvalidNameError, UnknownSearchMethodError
from emojisync.logging import get_logger
from emojisync.models import OperationResult, SearchHit, SearchResult
from emojisync.utils import chunks

logger = get_logger(__name__)

_COLLECTION_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
# chroma collection names: 3-63 chars, alphanumeric at both ends
_INDEX_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{1,61}[A-Za-z0-9]$")


class RecordStore(Protocol):
    """Operations the core needs from a record store."""

    def upsert(self, collection: str, key: Optional[str], text: str) -> OperationResult: ...

    def upsert_batch(self, collection: str, keys: Optional[Sequence[Optional[str]]],
                     texts: Sequence[str]) -> OperationResult: ...

    def get_text(self, collection: str, key: str) -> str: ...

    def get_texts(self, collection: str) -> Dict[str, str]: ...

    def search(self, collection: str, method: str, query: str, top_k: int,
               return_text: bool) -> SearchResult: ...

    def recompute_search_method(self, collection: str, method: str) -> OperationResult: ...


def new_key() -> str:
    return uuid.uuid4().hex


class SQLiteChromaStore:
    """Record store over a SQLite file and a chroma client.

    Args:
        db_path: SQLite database file holding record text
        chroma_client: any chromadb client (persistent or ephemeral)
        embedders: search method name -> embedding model
        embed_chunk_size: texts embedded per call during a recompute
    """

    def __init__(self, db_path: str, chroma_client, embedders: Dict[str, EmbeddingModel],
                 embed_chunk_size: int = 100):
        self.db_path = Path(db_path)
        self.chroma_client = chroma_client
        self.embedders = embedders
        self.embed_chunk_size = embed_chunk_size
        self._initialized = set()

    # ------------------------------------------------------------------
    # SQLite helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _table(self, conn, collection: str) -> str:
        if not _COLLECTION_NAME_RE.match(collection):
            raise InvalidNameError(f"Invalid collection name: {collection!r}")
        table = f"records_{collection}"
        if table not in self._initialized:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    key TEXT PRIMARY KEY,
                    text TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)
            self._initialized.add(table)
        return table

    def _write(self, collection: str, rows: List[tuple]) -> None:
        now = time.time()
        with self._connect() as conn:
            table = self._table(conn, collection)
            conn.executemany(
                f"""
                INSERT INTO {table} (key, text, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET text = excluded.text, updated_at = excluded.updated_at
                """,
                [(key, text, now) for key, text in rows],
            )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert(self, collection: str, key: Optional[str], text: str) -> OperationResult:
        key = key or new_key()
        try:
            self._write(collection, [(key, text)])
        except sqlite3.Error as e:
            logger.error(f"Upsert of {key} into {collection} failed: {e}")
            return OperationResult(successful=False, error=str(e))
        return OperationResult(successful=True, status=f"Upserted record {key}")

    def upsert_batch(self, collection: str, keys: Optional[Sequence[Optional[str]]],
                     texts: Sequence[str]) -> OperationResult:
        if keys is None:
            keys = [None] * len(texts)
        if len(keys) != len(texts):
            error = f"Batch has {len(keys)} keys for {len(texts)} texts"
            logger.error(f"Batch upsert into {collection} rejected: {error}")
            return OperationResult(successful=False, error=error)

        rows = [(key or new_key(), text) for key, text in zip(keys, texts)]
        try:
            self._write(collection, rows)
        except sqlite3.Error as e:
            logger.error(f"Batch upsert of {len(rows)} records into {collection} failed: {e}")
            return OperationResult(successful=False, error=str(e))
        return OperationResult(successful=True, status=f"Upserted {len(rows)} records")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_text(self, collection: str, key: str) -> str:
        with self._connect() as conn:
            table = self._table(conn, collection)
            row = conn.execute(f"SELECT text FROM {table} WHERE key = ?", (key,)).fetchone()
        if row is None:
            logger.warning(f"No record {key} in {collection}")
            return ""
        return row[0]

    def get_texts(self, collection: str) -> Dict[str, str]:
        with self._connect() as conn:
            table = self._table(conn, collection)
            rows = conn.execute(f"SELECT key, text FROM {table} ORDER BY rowid").fetchall()
        return {key: text for key, text in rows}

    # ------------------------------------------------------------------
    # Search index
    # ------------------------------------------------------------------

    def _embedder_for(self, method: str) -> EmbeddingModel:
        try:
            return self.embedders[method]
        except KeyError:
            raise UnknownSearchMethodError(f"Unknown search method: {method}") from None

    def _index(self, collection: str, method: str):
        name = f"{collection}-{method}"
        if not _INDEX_NAME_RE.match(name) or ".." in name:
            raise InvalidNameError(f"Invalid search index name: {name!r}")
        return self.chroma_client.get_or_create_collection(
            name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,
        )

    def recompute_search_method(self, collection: str, method: str) -> OperationResult:
        """Rebuild the vector index of ``method`` from every record in ``collection``."""
        try:
            embedder = self._embedder_for(method)
        except UnknownSearchMethodError as e:
            return OperationResult(successful=False, error=str(e))

        try:
            texts = self.get_texts(collection)
            index = self._index(collection, method)

            # Every embedding is computed before the old index is cleared
            batches = []
            for key_chunk in chunks(list(texts), self.embed_chunk_size):
                documents = [texts[key] for key in key_chunk]
                batches.append((list(key_chunk), documents, embedder.invoke(documents)))

            stale = index.get(include=[])["ids"]
            if stale:
                index.delete(ids=stale)

            for ids, documents, embeddings in batches:
                index.add(ids=ids, documents=documents, embeddings=embeddings)
        except Exception as e:
            logger.error(f"Recompute of {method} over {collection} failed: {e}")
            return OperationResult(successful=False, error=str(e))

        logger.info(f"Recomputed {method} over {len(texts)} records in {collection}")
        return OperationResult(successful=True, status=f"Recomputed {method} over {len(texts)} records")

    def search(self, collection: str, method: str, query: str, top_k: int,
               return_text: bool) -> SearchResult:
        embedder = self._embedder_for(method)
        index = self._index(collection, method)

        count = index.count()
        if count == 0:
            return SearchResult(collection=collection, method=method, hits=[])

        query_embedding = embedder.invoke([query])[0]
        include = ["distances", "documents"] if return_text else ["distances"]
        results = index.query(
            query_embeddings=[query_embedding],
            n_results=min(top_k, count),
            include=include,
        )

        hits = []
        for i, key in enumerate(results["ids"][0]):
            distance = float(results["distances"][0][i])
            hits.append(SearchHit(
                key=key,
                text=results["documents"][0][i] if return_text else None,
                score=1.0 - distance,  # Convert distance to similarity score
                distance=distance,
            ))
        return SearchResult(collection=collection, method=method, hits=hits)
