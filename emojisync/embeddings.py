"""Embedding models used by the search index.

Two variants are available:

- ``openai``: hosted OpenAI embeddings
- ``minilm``: all-MiniLM-L6-v2 run locally through chromadb's bundled ONNX
  embedding function
"""
from typing import Dict, List, Optional, Protocol

from chromadb.utils import embedding_functions
from openai import OpenAI

from emojisync.exceptions import GenerationError
from emojisync.logging import get_logger

logger = get_logger(__name__)


class EmbeddingModel(Protocol):
    def invoke(self, texts: List[str]) -> List[List[float]]: ...


class OpenAIEmbeddingModel:
    """Embeddings from the OpenAI embeddings API."""

    def __init__(self, client: Optional[OpenAI], model_name: str):
        self.client = client
        self.model_name = model_name

    def invoke(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        if self.client is None:
            raise GenerationError("OpenAI client is not configured (OPENAI_API_KEY not set)")

        response = self.client.embeddings.create(model=self.model_name, input=texts)
        return [data.embedding for data in response.data]


class LocalEmbeddingModel:
    """MiniLM embeddings computed in-process."""

    def __init__(self, embedding_function=None):
        # Loading the ONNX model is deferred until the first call
        self._embedding_function = embedding_function

    def invoke(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        if self._embedding_function is None:
            logger.info("Loading local MiniLM embedding function")
            self._embedding_function = embedding_functions.DefaultEmbeddingFunction()

        vectors = self._embedding_function(texts)
        return [vec.tolist() if hasattr(vec, "tolist") else list(vec) for vec in vectors]


def build_embedders(openai_client: Optional[OpenAI], openai_model_name: str) -> Dict[str, EmbeddingModel]:
    """Embedding models keyed by the names search methods refer to."""
    return {
        "openai": OpenAIEmbeddingModel(openai_client, openai_model_name),
        "minilm": LocalEmbeddingModel(),
    }
