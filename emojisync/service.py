"""Service facade: the operations exposed to API callers and scripts."""
from typing import Dict, List, Optional, Sequence

import chromadb
from openai import OpenAI

from emojisync.config import Settings, settings as default_settings
from emojisync.embeddings import EmbeddingModel, build_embedders
from emojisync.generation import ChatModel, ListGenerator, OpenAIChatModel, TextGenerator
from emojisync.index import SearchIndex
from emojisync.logging import get_logger
from emojisync.models import SearchResult
from emojisync.records import RecordWorkflow
from emojisync.seeds import STARTER_EMOJIS
from emojisync.store import RecordStore, SQLiteChromaStore
from emojisync.sync import BatchSynchronizer

logger = get_logger(__name__)


class EmojiService:
    """Wires generation, the record store and the search index together."""

    def __init__(self, settings: Settings, chat_model: ChatModel, store: RecordStore,
                 embedders: Dict[str, EmbeddingModel], seeds: Sequence[str] = STARTER_EMOJIS):
        self.settings = settings
        self.embedders = embedders
        self.seeds = list(seeds)
        self.synchronizer = BatchSynchronizer(ListGenerator(chat_model), store, settings)
        self.records = RecordWorkflow(TextGenerator(chat_model), store, settings)
        self.index = SearchIndex(store, settings)

    def embed_openai(self, texts: List[str]) -> List[List[float]]:
        return self.embedders["openai"].invoke(texts)

    def embed_local(self, texts: List[str]) -> List[List[float]]:
        return self.embedders["minilm"].invoke(texts)

    def sync_all_seed_records(self) -> str:
        return self.synchronizer.sync_all(self.seeds)

    def insert_record(self, text: str) -> str:
        return self.records.insert(text)

    def update_record(self, key: str, expected_token: str, new_text: str) -> str:
        return self.records.update(key, expected_token, new_text)

    def get_record_token(self, key: str) -> str:
        return self.records.get_token(key)

    def find_similar(self, query: str) -> SearchResult:
        return self.index.find_similar(query)

    def rebuild_index(self) -> str:
        return self.index.rebuild()


def get_chromadb_client(settings: Settings):
    """Persistent chroma client, or an in-memory one when no path is set."""
    if not settings.CHROMADB_PATH:
        return chromadb.EphemeralClient()
    return chromadb.PersistentClient(path=settings.CHROMADB_PATH)


def build_service(settings: Optional[Settings] = None) -> EmojiService:
    """Build the production object graph from settings."""
    settings = settings or default_settings
    settings.validate()

    openai_client = OpenAI(api_key=settings.OPENAI_API_KEY) if settings.OPENAI_API_KEY else None
    embedders = build_embedders(openai_client, settings.OPENAI_EMBEDDING_MODEL)

    # Search method name -> the embedding model it indexes with
    method_embedders = {}
    for method, embedder_name in settings.SEARCH_METHOD_EMBEDDERS.items():
        if embedder_name not in embedders:
            raise ValueError(f"Search method '{method}' uses unknown embedder '{embedder_name}'")
        method_embedders[method] = embedders[embedder_name]

    store = SQLiteChromaStore(
        settings.RECORDS_DB_PATH,
        get_chromadb_client(settings),
        method_embedders,
        embed_chunk_size=settings.EMBED_CHUNK_SIZE,
    )
    chat_model = OpenAIChatModel(openai_client, settings.GENERATION_MODEL, settings.GENERATION_TEMPERATURE)

    logger.info(
        f"Service ready: collection={settings.COLLECTION_NAME} method={settings.SEARCH_METHOD} "
        f"records={settings.RECORDS_DB_PATH} index={settings.CHROMADB_PATH or 'in-memory'}"
    )
    return EmojiService(settings, chat_model, store, embedders)
