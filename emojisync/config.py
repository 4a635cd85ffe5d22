"""Configuration settings for the emojisync service."""
import os
from typing import Dict, List


def _parse_method_embedders(raw: str) -> Dict[str, str]:
    """Parse "method:embedder,method:embedder" into a mapping."""
    methods = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, _, embedder = entry.partition(":")
        methods[name.strip()] = (embedder or "minilm").strip()
    return methods


class Settings:
    """Application settings loaded from environment variables.

    Any attribute can be overridden by keyword at construction so tests can
    point the components at a scratch collection or search method.
    """

    def __init__(self, **overrides):
        # OpenAI Configuration
        self.OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
        self.GENERATION_MODEL: str = os.getenv("GENERATION_MODEL", "gpt-4o-mini")
        self.GENERATION_TEMPERATURE: float = float(os.getenv("GENERATION_TEMPERATURE", "0.2"))
        self.OPENAI_EMBEDDING_MODEL: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")

        # Collection / index naming
        self.COLLECTION_NAME: str = os.getenv("COLLECTION_NAME", "emojis")
        self.SEARCH_METHOD: str = os.getenv("SEARCH_METHOD", "searchMethod1")
        self.SEARCH_METHOD_EMBEDDERS: Dict[str, str] = _parse_method_embedders(
            os.getenv("SEARCH_METHOD_EMBEDDERS", "searchMethod1:minilm")
        )

        # Batching
        self.GENERATE_CHUNK_SIZE: int = int(os.getenv("GENERATE_CHUNK_SIZE", "10"))
        self.UPSERT_CHUNK_SIZE: int = int(os.getenv("UPSERT_CHUNK_SIZE", "50"))
        self.EMBED_CHUNK_SIZE: int = int(os.getenv("EMBED_CHUNK_SIZE", "100"))
        self.SEARCH_TOP_K: int = int(os.getenv("SEARCH_TOP_K", "5"))

        # Storage
        self.RECORDS_DB_PATH: str = os.getenv("RECORDS_DB_PATH", "./emojisync.db")
        # Empty path keeps the search index in memory
        self.CHROMADB_PATH: str = os.getenv("CHROMADB_PATH", "./chroma_db")

        # API Configuration
        self.API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
        self.API_PORT: int = int(os.getenv("API_PORT", "8000"))

        # Logging Configuration
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"

        # Security Configuration
        self.CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    def validate(self) -> bool:
        """Validate required settings."""
        for name in ("GENERATE_CHUNK_SIZE", "UPSERT_CHUNK_SIZE", "EMBED_CHUNK_SIZE", "SEARCH_TOP_K"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer")
        if self.SEARCH_METHOD not in self.SEARCH_METHOD_EMBEDDERS:
            raise ValueError(f"No embedder configured for search method '{self.SEARCH_METHOD}'")
        if not self.OPENAI_API_KEY:
            print("⚠️  Warning: OPENAI_API_KEY not set. Generation and OpenAI embeddings are unavailable.")
        return True


# Global settings instance
settings = Settings()
