"""Embedding and generation providers reached over HTTP."""

from chatbot_rag.boundary.providers.embedding_providers import (
    EmbeddingProvider,
    GeminiEmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from chatbot_rag.boundary.providers.generation_providers import (
    GeminiGenerationProvider,
    GenerationProvider,
    OpenAIGenerationProvider,
)

__all__ = [
    "EmbeddingProvider",
    "GeminiEmbeddingProvider",
    "GeminiGenerationProvider",
    "GenerationProvider",
    "OpenAIEmbeddingProvider",
    "OpenAIGenerationProvider",
]
