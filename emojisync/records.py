"""Single-record insert and update with emoji checks."""
from emojisync.config import Settings
from emojisync.exceptions import StoreOperationError
from emojisync.generation import TextGenerator
from emojisync.logging import get_logger
from emojisync.store import RecordStore
from emojisync.tokens import token_of

logger = get_logger(__name__)

ALREADY_EXISTS = "Emoji already exists"
MISMATCH = "Emoji does not match"
DESCRIBE_INSTRUCTION = "generate a concise one sentence description for the emoji sent"


class RecordWorkflow:
    def __init__(self, text_generator: TextGenerator, store: RecordStore, settings: Settings):
        self.text_generator = text_generator
        self.store = store
        self.collection = settings.COLLECTION_NAME

    def exists(self, emoji: str) -> bool:
        """Scan every stored record for one whose leading emoji is ``emoji``."""
        texts = self.store.get_texts(self.collection).values()
        return any(token_of(text) == emoji for text in texts)

    def insert(self, text: str) -> str:
        """Describe and store a new emoji unless one with the same emoji exists.

        Returns the store status, or ``ALREADY_EXISTS`` without writing.

        Raises:
            StoreOperationError: the store rejected the upsert.
        """
        emoji = token_of(text)
        if self.exists(emoji):
            logger.info(f"Skipping insert of {emoji}: already stored")
            return ALREADY_EXISTS

        description = self.text_generator.generate(DESCRIBE_INSTRUCTION, emoji)
        response = self.store.upsert(self.collection, None, f"{emoji} {description}")
        if not response.successful:
            raise StoreOperationError(response.error)
        return response.status

    def update(self, key: str, emoji: str, text: str) -> str:
        """Overwrite the description at ``key`` if its stored emoji is ``emoji``.

        Returns the store status, or ``MISMATCH`` without writing.

        Raises:
            StoreOperationError: the store rejected the upsert.
        """
        stored = self.store.get_text(self.collection, key)
        current = token_of(stored)
        if not stored or not emoji or current != emoji:
            logger.info(f"Refusing update of {key}: stored emoji {current!r} != {emoji!r}")
            return MISMATCH

        response = self.store.upsert(self.collection, key, f"{emoji}: {text}")
        if not response.successful:
            raise StoreOperationError(response.error)
        return response.status

    def get_token(self, key: str) -> str:
        return token_of(self.store.get_text(self.collection, key))
