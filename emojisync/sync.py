"""Bulk population of the emoji collection from a seed list."""
from typing import List, Sequence

from emojisync.config import Settings
from emojisync.generation import ListGenerator
from emojisync.logging import get_logger
from emojisync.store import RecordStore
from emojisync.utils import chunks

logger = get_logger(__name__)

SYNC_SUCCESS_MESSAGE = "All starter emojis upserted successfully"


class BatchSynchronizer:
    """Generates descriptions for seed emojis and upserts them in batches.

    Generation and upsert use independent chunk sizes. Batches run strictly
    in order; the first failed upsert batch ends the run and its error is
    returned. Batches written before it stay written.
    """

    def __init__(self, list_generator: ListGenerator, store: RecordStore, settings: Settings):
        self.list_generator = list_generator
        self.store = store
        self.collection = settings.COLLECTION_NAME
        self.generate_chunk_size = settings.GENERATE_CHUNK_SIZE
        self.upsert_chunk_size = settings.UPSERT_CHUNK_SIZE

    def generate_candidates(self, seeds: Sequence[str]) -> List[str]:
        candidates: List[str] = []
        batches = chunks(seeds, self.generate_chunk_size)
        for i, batch in enumerate(batches, start=1):
            generated = self.list_generator.generate_list(", ".join(batch))
            logger.info(f"Generation batch {i}/{len(batches)}: {len(batch)} seeds -> {len(generated)} entries")
            candidates.extend(generated)
        return candidates

    def sync_all(self, seeds: Sequence[str]) -> str:
        candidates = self.generate_candidates(seeds)

        batches = chunks(candidates, self.upsert_chunk_size)
        for i, batch in enumerate(batches, start=1):
            response = self.store.upsert_batch(self.collection, None, list(batch))
            if not response.successful:
                logger.error(f"Upsert batch {i}/{len(batches)} failed, stopping: {response.error}")
                return response.error
            logger.info(f"Upsert batch {i}/{len(batches)}: {len(batch)} records")

        logger.info(f"Synced {len(candidates)} entries from {len(seeds)} seeds")
        return SYNC_SUCCESS_MESSAGE
