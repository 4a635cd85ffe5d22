"""Search index maintenance and similarity search.

The index is only refreshed by an explicit ``rebuild``; call it after bulk
changes to the collection.
"""
from emojisync.config import Settings
from emojisync.exceptions import StoreOperationError
from emojisync.logging import get_logger
from emojisync.models import SearchResult
from emojisync.store import RecordStore

logger = get_logger(__name__)


class SearchIndex:
    def __init__(self, store: RecordStore, settings: Settings):
        self.store = store
        self.collection = settings.COLLECTION_NAME
        self.method = settings.SEARCH_METHOD
        self.top_k = settings.SEARCH_TOP_K

    def rebuild(self) -> str:
        logger.info(f"Rebuilding {self.method} over {self.collection}")
        response = self.store.recompute_search_method(self.collection, self.method)
        if not response.successful:
            raise StoreOperationError(response.error)
        return response.status

    def find_similar(self, query: str) -> SearchResult:
        return self.store.search(self.collection, self.method, query, self.top_k, True)
