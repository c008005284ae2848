"""
Test suite for IngestionService.

Tests source resolution and the per-document chunk → embed → store
pipeline with status tracking, against an in-memory database.

System role: Verification of ingestion orchestration
"""

from unittest.mock import AsyncMock

import pytest

from chatbot_rag.application.services.ingestion_service import IngestionService
from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.db.models.document_model import DocumentStatus
from chatbot_rag.boundary.sources.source_schemas import SourceDocument
from chatbot_rag.core.embedding_gateway import EmbeddingGateway
from chatbot_rag.core.exceptions import (
    ChatbotNotFoundError,
    DocumentNotFoundError,
    EmbeddingError,
    ProviderError,
    ProviderErrorKind,
    ValidationError,
)
from chatbot_rag.models.ingest import IngestRequest
from conftest import FakeEmbeddingProvider

LONG_CONTENT = " ".join(f"Sentence {i} explains the widget protocol." for i in range(80))


def _service(db, store, provider=None, **kwargs) -> IngestionService:
    return IngestionService(
        db=db,
        embedding_gateway=EmbeddingGateway([provider or FakeEmbeddingProvider()]),
        vector_store=store,
        chunk_size=kwargs.pop("chunk_size", 500),
        chunk_overlap=kwargs.pop("chunk_overlap", 100),
        **kwargs,
    )


class TestResolveSources:
    """Request → source documents."""

    @pytest.mark.asyncio
    async def test_manual_content_should_become_single_document(self, test_async_db, local_vector_store):
        service = _service(test_async_db, local_vector_store)
        request = IngestRequest(content="Body.", url="https://a", metadata={"team": "docs"})

        sources = await service.resolve_sources(request)

        assert sources == [
            SourceDocument(url="https://a", content="Body.", content_type="web_page", metadata={"team": "docs"})
        ]

    @pytest.mark.asyncio
    async def test_empty_request_should_raise_validation_error(self, test_async_db, local_vector_store):
        service = _service(test_async_db, local_vector_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.resolve_sources(IngestRequest(content="  "))

        assert exc_info.value.message == "Content, URL, or GitHub repository is required"

    @pytest.mark.asyncio
    async def test_bad_repository_format_should_raise_validation_error(
        self, test_async_db, local_vector_store
    ):
        service = _service(test_async_db, local_vector_store)

        with pytest.raises(ValidationError) as exc_info:
            await service.resolve_sources(IngestRequest(source_type="github", github_repo="not-a-repo"))

        assert "owner/repository" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_github_source_should_merge_request_metadata(self, test_async_db, local_vector_store):
        extractor = AsyncMock()
        extractor.extract.return_value = [
            SourceDocument(url="https://github.com/a/b/blob/main/README.md", content="Readme.",
                           content_type="markdown", metadata={"source": "github"})
        ]
        service = _service(test_async_db, local_vector_store, github_extractor=extractor)

        sources = await service.resolve_sources(
            IngestRequest(source_type="github", github_repo="a/b", metadata={"version": "2"})
        )

        extractor.extract.assert_awaited_once_with("a", "b")
        assert sources[0].metadata == {"source": "github", "version": "2"}

    @pytest.mark.asyncio
    async def test_website_source_should_crawl_url(self, test_async_db, local_vector_store):
        crawler = AsyncMock()
        crawler.crawl.return_value = []
        service = _service(test_async_db, local_vector_store, website_crawler=crawler)

        await service.resolve_sources(IngestRequest(source_type="website", url="https://docs.example.com"))

        crawler.crawl.assert_awaited_once_with("https://docs.example.com")


class TestIngest:
    """Document processing pipeline."""

    @pytest.mark.asyncio
    async def test_ingest_should_store_chunks_and_complete_document(
        self, test_async_db, chatbot, local_vector_store
    ):
        provider = FakeEmbeddingProvider()
        service = _service(test_async_db, local_vector_store, provider)

        result = await service.ingest(chatbot.id, IngestRequest(content=LONG_CONTENT, url="https://a"))

        assert result.total_documents == 1
        ingested = result.documents[0]
        assert ingested.status is DocumentStatus.COMPLETED
        assert ingested.chunk_count > 1
        assert result.total_embeddings == ingested.chunk_count
        assert len(provider.calls) == 1
        assert len(provider.calls[0]) == ingested.chunk_count

        document = await document_crud.get_by_id(test_async_db, ingested.id)
        assert document.status is DocumentStatus.COMPLETED
        assert document.chunk_count == ingested.chunk_count
        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == ingested.chunk_count

    @pytest.mark.asyncio
    async def test_run_on_text_should_be_stored_as_one_chunk(
        self, test_async_db, chatbot, local_vector_store
    ):
        service = _service(test_async_db, local_vector_store, chunk_size=1000, chunk_overlap=200)

        result = await service.ingest(chatbot.id, IngestRequest(content="A" * 1500))

        assert result.documents[0].chunk_count == 1
        results = await local_vector_store.search(test_async_db, chatbot.id, [1.0] + [0.0] * 767, 5)
        assert len(results[0].content) == 1500

    @pytest.mark.asyncio
    async def test_unknown_chatbot_should_raise_not_found(self, test_async_db, local_vector_store):
        service = _service(test_async_db, local_vector_store)

        with pytest.raises(ChatbotNotFoundError):
            await service.ingest(4242, IngestRequest(content="Body."))

    @pytest.mark.asyncio
    async def test_embedding_failure_should_mark_failed_without_chunks(
        self, test_async_db, chatbot, local_vector_store
    ):
        provider = FakeEmbeddingProvider(
            error=ProviderError("openai", ProviderErrorKind.QUOTA, "insufficient_quota")
        )
        service = _service(test_async_db, local_vector_store, provider)

        with pytest.raises(EmbeddingError):
            await service.ingest(chatbot.id, IngestRequest(content=LONG_CONTENT))

        documents = await document_crud.get_by_chatbot_id(test_async_db, chatbot.id)
        assert len(documents) == 1
        assert documents[0].status is DocumentStatus.FAILED
        assert "Embedding failed for all providers" in documents[0].error_message
        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == 0

    @pytest.mark.asyncio
    async def test_failure_should_keep_documents_completed_before_it(
        self, test_async_db, chatbot, local_vector_store
    ):
        calls = {"count": 0}

        def vector_for(text: str) -> list[float]:
            if "second" in text:
                raise ProviderError("openai", ProviderErrorKind.TRANSIENT, "HTTP 503")
            calls["count"] += 1
            return [1.0] + [0.0] * 767

        crawler = AsyncMock()
        crawler.crawl.return_value = [
            SourceDocument(url="https://a/1", content="The first page."),
            SourceDocument(url="https://a/2", content="The second page."),
        ]
        service = _service(
            test_async_db,
            local_vector_store,
            FakeEmbeddingProvider(vector_for=vector_for),
            website_crawler=crawler,
        )

        with pytest.raises(EmbeddingError):
            await service.ingest(chatbot.id, IngestRequest(source_type="website", url="https://a"))

        statuses = {
            document.url: document.status
            for document in await document_crud.get_by_chatbot_id(test_async_db, chatbot.id)
        }
        assert statuses == {"https://a/1": DocumentStatus.COMPLETED, "https://a/2": DocumentStatus.FAILED}
        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == 1


class TestReingest:
    """Retrying a document."""

    @pytest.mark.asyncio
    async def test_reingest_should_replace_chunks_and_recover_failed_document(
        self, test_async_db, chatbot, local_vector_store
    ):
        failing = _service(
            test_async_db,
            local_vector_store,
            FakeEmbeddingProvider(error=ProviderError("openai", ProviderErrorKind.TIMEOUT, "slow")),
        )
        with pytest.raises(EmbeddingError):
            await failing.ingest(chatbot.id, IngestRequest(content=LONG_CONTENT))
        document = (await document_crud.get_by_chatbot_id(test_async_db, chatbot.id))[0]

        service = _service(test_async_db, local_vector_store)
        first = await service.reingest_document(chatbot.id, document.id)
        second = await service.reingest_document(chatbot.id, document.id)

        assert first.status is DocumentStatus.COMPLETED
        assert second.chunk_count == first.chunk_count
        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == first.chunk_count

        refreshed = await document_crud.get_by_id(test_async_db, document.id)
        assert refreshed.status is DocumentStatus.COMPLETED
        assert refreshed.error_message is None

    @pytest.mark.asyncio
    async def test_reingest_other_tenants_document_should_raise_not_found(
        self, test_async_db, chatbot, other_chatbot, local_vector_store
    ):
        document = await document_crud.create(test_async_db, chatbot_id=other_chatbot.id, content="Body.")
        await test_async_db.commit()
        service = _service(test_async_db, local_vector_store)

        with pytest.raises(DocumentNotFoundError):
            await service.reingest_document(chatbot.id, document.id)
