"""
Ingestion service orchestrator.

Resolves an ingest request into source documents (manual text, GitHub
repository, or crawled website) and runs each one through
chunk → embed → store, sequentially, with per-document status tracking.

Dependencies: chatbot_rag.core, chatbot_rag.boundary.db, chatbot_rag.boundary.vdb,
    chatbot_rag.boundary.sources
System role: Document ingestion orchestration
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.chatbot_crud import chatbot_crud
from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.db.models.document_model import DocumentStatus
from chatbot_rag.boundary.sources.github_extractor import GitHubDocsExtractor, parse_repo
from chatbot_rag.boundary.sources.source_schemas import SourceDocument
from chatbot_rag.boundary.sources.website_crawler import WebsiteCrawler
from chatbot_rag.boundary.vdb.vector_schemas import ChunkRecord
from chatbot_rag.boundary.vdb.vector_store_base import VectorStore
from chatbot_rag.core.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, chunk_text
from chatbot_rag.core.embedding_gateway import EmbeddingGateway
from chatbot_rag.core.exceptions import (
    ChatbotNotFoundError,
    DocumentNotFoundError,
    ValidationError,
)
from chatbot_rag.models.ingest import IngestRequest
from chatbot_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestedDocument:
    """Outcome of ingesting one document."""

    id: int
    url: str | None
    content_type: str
    chunk_count: int
    status: DocumentStatus


@dataclass(frozen=True)
class IngestResult:
    """Outcome of an ingest request."""

    documents: list[IngestedDocument] = field(default_factory=list)

    @property
    def total_documents(self) -> int:
        return len(self.documents)

    @property
    def total_embeddings(self) -> int:
        return sum(document.chunk_count for document in self.documents)


class IngestionService:
    """
    Document ingestion orchestrator.

    Each document row is committed as PENDING before processing. Chunk
    writes and the COMPLETED status are committed together; on any failure
    the chunk writes are rolled back and the document is marked FAILED
    with the error, which then propagates.
    """

    def __init__(
        self,
        db: AsyncSession,
        embedding_gateway: EmbeddingGateway,
        vector_store: VectorStore,
        github_extractor: GitHubDocsExtractor | None = None,
        website_crawler: WebsiteCrawler | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for document and chunk writes
            embedding_gateway: Chunk embedding with provider fallback
            vector_store: Chunk storage
            github_extractor: Repository source (created without a token if None)
            website_crawler: Website source (default settings if None)
            chunk_size: Target chunk size in characters
            chunk_overlap: Sentence overlap budget in characters
        """
        self.db = db
        self.embedding_gateway = embedding_gateway
        self.vector_store = vector_store
        self.github_extractor = github_extractor or GitHubDocsExtractor(token=None)
        self.website_crawler = website_crawler or WebsiteCrawler()
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    async def ingest(self, chatbot_id: int, request: IngestRequest) -> IngestResult:
        """
        Ingest every document the request resolves to.

        Args:
            chatbot_id: Owning chatbot
            request: Manual content, GitHub repository, or website URL

        Returns:
            IngestResult: Per-document outcome and totals

        Raises:
            ChatbotNotFoundError: Unknown chatbot
            ValidationError: Nothing to ingest or malformed repository name
            SourceConfigurationError / SourceExtractionError: Source unavailable
            EmbeddingError / ProviderConfigurationError / VectorStoreError: Processing failed
        """
        if not await chatbot_crud.exists(self.db, chatbot_id):
            raise ChatbotNotFoundError(chatbot_id)

        sources = await self.resolve_sources(request)
        logger.info(
            f"{__name__}:ingest - chatbot_id={chatbot_id} resolved {len(sources)} documents"
        )

        documents = []
        for source in sources:
            documents.append(await self.ingest_document(chatbot_id, source))

        result = IngestResult(documents=documents)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest - chatbot_id={chatbot_id} stored {result.total_documents} documents",
            chatbot_id=chatbot_id,
            urls=[document.url for document in documents],
            total_embeddings=result.total_embeddings,
        )
        return result

    async def resolve_sources(self, request: IngestRequest) -> list[SourceDocument]:
        """
        Turn an ingest request into source documents.

        GitHub takes precedence, then website crawling, then manual content.
        Request metadata is merged over source metadata.
        """
        if request.source_type == "github" and request.github_repo:
            parsed = parse_repo(request.github_repo)
            if parsed is None:
                raise ValidationError(
                    "Invalid GitHub repository format. Use owner/repository (e.g. microsoft/TypeScript)",
                    field="githubRepo",
                )
            sources = await self.github_extractor.extract(*parsed)
        elif request.source_type == "website" and request.url:
            sources = await self.website_crawler.crawl(request.url)
        elif request.content and request.content.strip():
            sources = [
                SourceDocument(
                    url=request.url,
                    content=request.content,
                    content_type=request.content_type or "web_page",
                )
            ]
        else:
            raise ValidationError("Content, URL, or GitHub repository is required")

        extra = request.metadata or {}
        return [
            source.model_copy(update={"metadata": {**source.metadata, **extra}})
            for source in sources
        ]

    async def ingest_document(self, chatbot_id: int, source: SourceDocument) -> IngestedDocument:
        """Insert one document and process it."""
        document = await document_crud.create(
            self.db,
            chatbot_id=chatbot_id,
            url=source.url,
            content=source.content,
            content_type=source.content_type,
            document_metadata=source.metadata,
            status=DocumentStatus.PENDING,
        )
        document_id = document.id
        await self.db.commit()

        chunk_count = await self._process(document_id, source.content)
        return IngestedDocument(
            id=document_id,
            url=source.url,
            content_type=source.content_type,
            chunk_count=chunk_count,
            status=DocumentStatus.COMPLETED,
        )

    async def reingest_document(self, chatbot_id: int, document_id: int) -> IngestedDocument:
        """
        Replace a document's chunks by reprocessing its stored content.

        Used to retry FAILED documents or refresh embeddings.

        Raises:
            DocumentNotFoundError: Document missing or owned by another chatbot
        """
        document = await document_crud.get_for_chatbot(self.db, chatbot_id, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id, chatbot_id)

        url, content, content_type = document.url, document.content, document.content_type
        chunk_count = await self._process(document_id, content, replace=True)
        return IngestedDocument(
            id=document_id,
            url=url,
            content_type=content_type,
            chunk_count=chunk_count,
            status=DocumentStatus.COMPLETED,
        )

    async def _process(self, document_id: int, content: str, replace: bool = False) -> int:
        await document_crud.mark_processing(self.db, document_id)
        if replace:
            removed = await self.vector_store.delete_by_document(self.db, document_id)
            logger.info(f"{__name__}:_process - Removed {removed} old chunks of document {document_id}")
        await self.db.commit()

        try:
            chunks = chunk_text(content, self.chunk_size, self.chunk_overlap)
            embeddings = await self.embedding_gateway.embed_batch(chunks)
            records = [
                ChunkRecord(content=chunk, embedding=embedding, chunk_index=index)
                for index, (chunk, embedding) in enumerate(zip(chunks, embeddings))
            ]
            await self.vector_store.store_many(self.db, document_id, records)
            await document_crud.mark_completed(self.db, document_id, len(records))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:_process - Document {document_id} failed",
                e,
                document_id=document_id,
            )
            await document_crud.mark_failed(self.db, document_id, str(e))
            await self.db.commit()
            raise

        logger.info(f"{__name__}:_process - Document {document_id} stored {len(records)} chunks")
        return len(records)
