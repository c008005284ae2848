"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: chatbot_rag.configs, chatbot_rag.application, chatbot_rag.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.configs import get_settings
from chatbot_rag.boundary.db import get_async_db
from chatbot_rag.application.services import (
    ChatService,
    DocumentService,
    IngestionService,
    RetrievalService,
)


class ServiceCache:
    """Container for cached, request-independent service collaborators."""

    def __init__(self):
        self._vector_store = None
        self._embedding_gateway = None
        self._generation_chain = None
        self._github_extractor = None
        self._website_crawler = None

    @property
    def vector_store(self):
        """Get cached vector store."""
        if self._vector_store is None:
            from chatbot_rag.boundary.vdb.vector_store_factory import get_vector_store
            self._vector_store = get_vector_store()
        return self._vector_store

    @property
    def embedding_gateway(self):
        """Get cached embedding gateway (OpenAI primary, Gemini fallback)."""
        if self._embedding_gateway is None:
            from chatbot_rag.boundary.providers import (
                GeminiEmbeddingProvider,
                OpenAIEmbeddingProvider,
            )
            from chatbot_rag.core.embedding_gateway import EmbeddingGateway

            settings = get_settings()
            providers = settings.providers
            dimension = settings.vector_store.embedding_dimension
            self._embedding_gateway = EmbeddingGateway(
                providers=[
                    OpenAIEmbeddingProvider(
                        api_key=providers.openai_api_key,
                        model=providers.openai_embedding_model,
                        dimensions=dimension,
                        base_url=providers.openai_base_url,
                        timeout=providers.request_timeout_seconds,
                    ),
                    GeminiEmbeddingProvider(
                        api_key=providers.google_generative_ai_api_key,
                        model=providers.gemini_embedding_model,
                        dimensions=dimension,
                        base_url=providers.gemini_base_url,
                        timeout=providers.request_timeout_seconds,
                    ),
                ],
                dimension=dimension,
            )
        return self._embedding_gateway

    @property
    def generation_chain(self):
        """Get cached generation chain (OpenAI primary, Gemini fallback)."""
        if self._generation_chain is None:
            from chatbot_rag.boundary.providers import (
                GeminiGenerationProvider,
                OpenAIGenerationProvider,
            )
            from chatbot_rag.core.generation_chain import GenerationChain

            providers = get_settings().providers
            self._generation_chain = GenerationChain(
                providers=[
                    OpenAIGenerationProvider(
                        api_key=providers.openai_api_key,
                        model=providers.openai_chat_model,
                        temperature=providers.temperature,
                        max_tokens=providers.max_output_tokens,
                        base_url=providers.openai_base_url,
                        timeout=providers.request_timeout_seconds,
                    ),
                    GeminiGenerationProvider(
                        api_key=providers.google_generative_ai_api_key,
                        model=providers.gemini_chat_model,
                        temperature=providers.temperature,
                        max_tokens=providers.max_output_tokens,
                        base_url=providers.gemini_base_url,
                        timeout=providers.request_timeout_seconds,
                    ),
                ]
            )
        return self._generation_chain

    @property
    def github_extractor(self):
        """Get cached GitHub documentation extractor."""
        if self._github_extractor is None:
            from chatbot_rag.boundary.sources import GitHubDocsExtractor

            ingestion = get_settings().ingestion
            self._github_extractor = GitHubDocsExtractor(
                token=ingestion.github_token,
                api_url=ingestion.github_api_url,
            )
        return self._github_extractor

    @property
    def website_crawler(self):
        """Get cached website crawler."""
        if self._website_crawler is None:
            from chatbot_rag.boundary.sources import WebsiteCrawler

            ingestion = get_settings().ingestion
            self._website_crawler = WebsiteCrawler(
                max_depth=ingestion.crawl_max_depth,
                min_content_chars=ingestion.crawl_min_content_chars,
                timeout=ingestion.crawl_timeout_seconds,
                user_agent=ingestion.user_agent,
            )
        return self._website_crawler

    def clear(self) -> None:
        """Clear all cached instances."""
        self._vector_store = None
        self._embedding_gateway = None
        self._generation_chain = None
        self._github_extractor = None
        self._website_crawler = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_retrieval_service(db: AsyncSession = Depends(get_async_db)) -> RetrievalService:
    """
    Get retrieval service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        RetrievalService: Query embedding and vector search
    """
    cache = get_service_cache()
    return RetrievalService(
        db=db,
        embedding_gateway=cache.embedding_gateway,
        vector_store=cache.vector_store,
    )


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        retrieval_service: Retrieval service sharing the same session

    Returns:
        ChatService: Chat orchestrator with configured generation chain
    """
    cache = get_service_cache()
    return ChatService(
        db=db,
        retrieval_service=retrieval_service,
        generation_chain=cache.generation_chain,
        retrieval_limit=get_settings().vector_store.default_top_k,
    )


def get_ingestion_service(db: AsyncSession = Depends(get_async_db)) -> IngestionService:
    """
    Get ingestion service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        IngestionService: Chunk/embed/store pipeline with source extractors
    """
    cache = get_service_cache()
    ingestion = get_settings().ingestion
    return IngestionService(
        db=db,
        embedding_gateway=cache.embedding_gateway,
        vector_store=cache.vector_store,
        github_extractor=cache.github_extractor,
        website_crawler=cache.website_crawler,
        chunk_size=ingestion.chunk_size,
        chunk_overlap=ingestion.chunk_overlap,
    )


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document statistics and deletion
    """
    return DocumentService(db=db, vector_store=get_service_cache().vector_store)
