from __future__ import annotations

from docs_rag.core.config import settings
from .base import EmbeddingProvider, InputKind
from .cohere_provider import CohereProvider
from .openai_provider import OpenAIEmbeddingProvider


def default_embedder() -> EmbeddingProvider:
    """Embedding provider selected by EMBEDDING_PROVIDER."""
    name = settings.EMBEDDING_PROVIDER.lower()
    if name == "openai":
        return OpenAIEmbeddingProvider()
    if name == "cohere":
        return CohereProvider()
    raise ValueError("EMBEDDING_PROVIDER must be 'openai' or 'cohere'")


__all__ = [
    "EmbeddingProvider",
    "InputKind",
    "CohereProvider",
    "OpenAIEmbeddingProvider",
    "default_embedder",
]
