"""Error types raised by the emojisync core.

Expected alternative outcomes (an emoji that already exists, a key whose
emoji does not match) are returned as status strings, never raised.
"""


class EmojiSyncError(Exception):
    """Base class for all emojisync errors."""


class StoreOperationError(EmojiSyncError):
    """A mutating record store call reported an unsuccessful result.

    The message is the store's error text, unchanged.
    """

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error


class GenerationError(EmojiSyncError):
    """The generation service could not be invoked."""


class StructuredOutputError(EmojiSyncError):
    """A JSON-constrained generation response could not be decoded."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class UnknownSearchMethodError(EmojiSyncError):
    """No embedder is configured for the requested search method."""


class InvalidNameError(EmojiSyncError, ValueError):
    """A collection or search index name cannot be used by the store."""
