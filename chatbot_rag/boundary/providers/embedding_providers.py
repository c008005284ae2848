"""
Embedding provider implementations.

OpenAI embeddings (native batch, dimensions pinned to the store's size)
and Google Gemini embedContent (one text per call).

Dependencies: httpx, chatbot_rag.boundary.providers.base
System role: Embedding backends behind the embedding gateway
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from chatbot_rag.boundary.providers.base import HTTPProvider


class EmbeddingProvider(ABC):
    """Interface for a single embedding backend."""

    name: str

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed one text. Raises ProviderError on failure."""

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in input order. Raises ProviderError on failure."""


def _as_vector(value: Any) -> list[float] | None:
    if not isinstance(value, list) or not value:
        return None
    if not all(isinstance(x, (int, float)) for x in value):
        return None
    return [float(x) for x in value]


class OpenAIEmbeddingProvider(HTTPProvider, EmbeddingProvider):
    """OpenAI /embeddings client."""

    name = "openai"

    def __init__(
        self,
        api_key: str | None,
        model: str = "text-embedding-3-small",
        dimensions: int = 768,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, base_url, timeout, http_client)
        self.model = model
        self.dimensions = dimensions

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def embed(self, text: str) -> list[float]:
        return (await self.embed_batch([text]))[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        payload = await self._post_json(
            "embeddings",
            {"model": self.model, "input": texts, "dimensions": self.dimensions},
        )
        data = payload.get("data")
        if not isinstance(data, list) or len(data) != len(texts):
            raise self._malformed("response is missing one embedding per input")
        if not all(
            isinstance(item, dict) and isinstance(item.get("index", 0), int) for item in data
        ):
            raise self._malformed("embedding entries must be objects with an integer index")

        vectors: list[list[float]] = []
        for item in sorted(data, key=lambda entry: entry.get("index", 0)):
            vector = _as_vector(item.get("embedding"))
            if vector is None:
                raise self._malformed("embedding entry is missing or not numeric")
            vectors.append(vector)
        return vectors


class GeminiEmbeddingProvider(HTTPProvider, EmbeddingProvider):
    """Google Generative Language embedContent client."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model: str = "text-embedding-004",
        dimensions: int = 768,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(api_key, base_url, timeout, http_client)
        self.model = model
        self.dimensions = dimensions

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }

    async def embed(self, text: str) -> list[float]:
        payload = await self._post_json(
            f"models/{self.model}:embedContent",
            {
                "model": f"models/{self.model}",
                "content": {"parts": [{"text": text}]},
                "outputDimensionality": self.dimensions,
            },
        )
        embedding = payload.get("embedding")
        vector = _as_vector(embedding.get("values")) if isinstance(embedding, dict) else None
        if vector is None:
            raise self._malformed("response is missing embedding.values")
        return vector

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        # No batch endpoint; any failed item aborts the whole batch.
        vectors = []
        for text in texts:
            vectors.append(await self.embed(text))
        return vectors
