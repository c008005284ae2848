"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, seeded chatbots, fake model providers
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from typing import Callable

import pytest

from chatbot_rag.boundary.providers.embedding_providers import EmbeddingProvider
from chatbot_rag.boundary.providers.generation_providers import GenerationProvider

DIMENSION = 768


def unit_vector(index: int, dimension: int = DIMENSION) -> list[float]:
    """Vector with a single 1.0 at index."""
    vector = [0.0] * dimension
    vector[index] = 1.0
    return vector


class FakeEmbeddingProvider(EmbeddingProvider):
    """Embedding provider returning vectors from a text -> vector function."""

    def __init__(
        self,
        name: str = "openai",
        vector_for: Callable[[str], list[float]] | None = None,
        error: Exception | None = None,
        configured: bool = True,
    ) -> None:
        self.name = name
        self.vector_for = vector_for or (lambda text: unit_vector(0))
        self.error = error
        self.configured = configured
        self.calls: list[list[str]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def embed(self, text: str) -> list[float]:
        return (await self.embed_batch([text]))[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.error is not None:
            raise self.error
        return [self.vector_for(text) for text in texts]


class FakeGenerationProvider(GenerationProvider):
    """Generation provider recording prompts and returning a fixed reply."""

    def __init__(
        self,
        name: str = "openai",
        reply: str = "Generated answer.",
        error: Exception | None = None,
        configured: bool = True,
    ) -> None:
        self.name = name
        self.reply = reply
        self.error = error
        self.configured = configured
        self.prompts: list[tuple[str, str]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.prompts.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from chatbot_rag.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def chatbot(test_async_db):
    """Persisted chatbot named Acme Docs."""
    from chatbot_rag.boundary.db.CRUD.chatbot_crud import chatbot_crud

    bot = await chatbot_crud.create(test_async_db, name="Acme Docs")
    await test_async_db.commit()
    return bot


@pytest.fixture
async def other_chatbot(test_async_db):
    """Second tenant for isolation tests."""
    from chatbot_rag.boundary.db.CRUD.chatbot_crud import chatbot_crud

    bot = await chatbot_crud.create(test_async_db, name="Other Bot")
    await test_async_db.commit()
    return bot


@pytest.fixture
def local_vector_store():
    """NumPy-backed vector store at the production dimension."""
    from chatbot_rag.boundary.vdb.local_vector_store import LocalVectorStore

    return LocalVectorStore(dimension=DIMENSION)
