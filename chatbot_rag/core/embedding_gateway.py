"""
Embedding provider gateway.

Tries configured embedding providers in priority order and returns the
first success, normalized to the store's fixed dimension. Every failure
of every provider is collected; if none succeeds a single EmbeddingError
names them all.

Dependencies: chatbot_rag.boundary.providers, chatbot_rag.core.exceptions
System role: Embedding generation for ingestion and retrieval
"""

import logging
from typing import Awaitable, Callable, Sequence

from chatbot_rag.boundary.providers.embedding_providers import EmbeddingProvider
from chatbot_rag.core.exceptions import (
    EmbeddingError,
    ProviderConfigurationError,
    ProviderError,
    ProviderErrorKind,
)

logger = logging.getLogger(__name__)

EMBEDDING_DIMENSION = 768


class EmbeddingGateway:
    """Prioritized embedding provider chain with fixed output dimension."""

    def __init__(
        self,
        providers: Sequence[EmbeddingProvider],
        dimension: int = EMBEDDING_DIMENSION,
    ) -> None:
        """
        Initialize gateway.

        Args:
            providers: Providers in priority order (primary first)
            dimension: Required vector length
        """
        self.providers = list(providers)
        self.dimension = dimension

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            ProviderConfigurationError: No provider has an API key
            EmbeddingError: Every configured provider failed
        """
        vectors = await self._run(lambda provider: self._single(provider, text), expected=1)
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts preserving input order.

        A provider either returns a vector for every text or fails as a whole;
        partial results are never returned.

        Raises:
            ProviderConfigurationError: No provider has an API key
            EmbeddingError: Every configured provider failed
        """
        if not texts:
            return []
        return await self._run(lambda provider: provider.embed_batch(texts), expected=len(texts))

    @staticmethod
    async def _single(provider: EmbeddingProvider, text: str) -> list[list[float]]:
        return [await provider.embed(text)]

    async def _run(
        self,
        call: Callable[[EmbeddingProvider], Awaitable[list[list[float]]]],
        expected: int,
    ) -> list[list[float]]:
        configured = [provider for provider in self.providers if provider.is_configured]
        if not configured:
            raise ProviderConfigurationError("embedding")

        failures: list[ProviderError] = []
        for provider in configured:
            try:
                vectors = await call(provider)
                if len(vectors) != expected:
                    raise ProviderError(
                        provider.name,
                        ProviderErrorKind.MALFORMED,
                        f"returned {len(vectors)} vectors for {expected} inputs",
                    )
                normalized = [self._fit_dimension(provider.name, vector) for vector in vectors]
            except ProviderError as e:
                logger.warning(
                    f"{__name__}:_run - {provider.name} failed ({e.kind.value}): {e.message}",
                    extra={"provider": provider.name, "kind": e.kind.value},
                )
                failures.append(e)
                continue

            logger.info(
                f"{__name__}:_run - Embedded {expected} text(s) via {provider.name}",
                extra={"provider": provider.name, "count": expected},
            )
            return normalized

        raise EmbeddingError(failures)

    def _fit_dimension(self, provider_name: str, vector: list[float]) -> list[float]:
        """Truncate longer vectors; reject shorter ones as malformed."""
        if len(vector) > self.dimension:
            return vector[: self.dimension]
        if len(vector) < self.dimension:
            raise ProviderError(
                provider_name,
                ProviderErrorKind.MALFORMED,
                f"vector has {len(vector)} dimensions, expected {self.dimension}",
            )
        return vector
