"""
Test suite for LocalVectorStore against an in-memory database.

Covers tenant isolation, ranking order and ties, limits, hydration, and
dimension validation.

System role: Verification of vector storage and search
"""

import numpy as np
import pytest

from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.vdb.local_vector_store import cosine_distances
from chatbot_rag.boundary.vdb.vector_schemas import ChunkRecord
from chatbot_rag.core.exceptions import VectorStoreError
from conftest import DIMENSION, unit_vector


async def _document(session, chatbot_id: int, url: str = "https://docs.example.com"):
    document = await document_crud.create(
        session, chatbot_id=chatbot_id, url=url, content="content"
    )
    await session.commit()
    return document


def _blend(a: int, b: int, weight: float) -> list[float]:
    vector = [0.0] * DIMENSION
    vector[a] = weight
    vector[b] = 1.0 - weight
    return vector


class TestCosineDistances:
    """NumPy distance helper."""

    def test_identical_and_orthogonal_vectors(self):
        matrix = np.array([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
        distances = cosine_distances(matrix, np.array([1.0, 0.0]))

        assert distances[0] == pytest.approx(0.0)
        assert distances[1] == pytest.approx(1.0)
        assert distances[2] == pytest.approx(1.0)


class TestLocalVectorStoreSearch:
    """Ranking and isolation."""

    @pytest.mark.asyncio
    async def test_search_should_order_by_distance(self, test_async_db, chatbot, local_vector_store):
        document = await _document(test_async_db, chatbot.id)
        far = await local_vector_store.store(test_async_db, document.id, "far", unit_vector(5))
        near = await local_vector_store.store(test_async_db, document.id, "near", _blend(0, 5, 0.9))
        exact = await local_vector_store.store(test_async_db, document.id, "exact", unit_vector(0))
        await test_async_db.commit()

        results = await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), limit=3)

        assert [result.chunk_id for result in results] == [exact, near, far]
        distances = [result.distance for result in results]
        assert distances == sorted(distances)

    @pytest.mark.asyncio
    async def test_ties_should_keep_insertion_order(self, test_async_db, chatbot, local_vector_store):
        document = await _document(test_async_db, chatbot.id)
        ids = await local_vector_store.store_many(
            test_async_db,
            document.id,
            [ChunkRecord(content=f"chunk {i}", embedding=unit_vector(1), chunk_index=i) for i in range(4)],
        )
        await test_async_db.commit()

        results = await local_vector_store.search(test_async_db, chatbot.id, unit_vector(1), limit=4)

        assert [result.chunk_id for result in results] == ids

    @pytest.mark.asyncio
    async def test_search_should_never_return_other_tenants_chunks(
        self, test_async_db, chatbot, other_chatbot, local_vector_store
    ):
        mine = await _document(test_async_db, chatbot.id)
        theirs = await _document(test_async_db, other_chatbot.id)
        await local_vector_store.store(test_async_db, theirs.id, "identical", unit_vector(0))
        own = await local_vector_store.store(test_async_db, mine.id, "orthogonal", unit_vector(7))
        await test_async_db.commit()

        results = await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), limit=5)

        assert [result.chunk_id for result in results] == [own]

    @pytest.mark.asyncio
    async def test_limit_should_cap_results_without_padding(
        self, test_async_db, chatbot, local_vector_store
    ):
        document = await _document(test_async_db, chatbot.id)
        for i in range(2):
            await local_vector_store.store(test_async_db, document.id, f"chunk {i}", unit_vector(i))
        await test_async_db.commit()

        assert len(await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 1)) == 1
        assert len(await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 10)) == 2
        assert await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 0) == []

    @pytest.mark.asyncio
    async def test_empty_corpus_should_return_nothing(self, test_async_db, chatbot, local_vector_store):
        assert await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 3) == []


class TestLocalVectorStoreValidation:
    """Dimension checks."""

    @pytest.mark.asyncio
    async def test_store_should_reject_wrong_dimension(self, test_async_db, chatbot, local_vector_store):
        document = await _document(test_async_db, chatbot.id)

        with pytest.raises(VectorStoreError):
            await local_vector_store.store(test_async_db, document.id, "short", [1.0, 0.0])

    @pytest.mark.asyncio
    async def test_store_many_should_write_nothing_when_any_record_is_invalid(
        self, test_async_db, chatbot, local_vector_store
    ):
        document = await _document(test_async_db, chatbot.id)
        records = [
            ChunkRecord(content="ok", embedding=unit_vector(0)),
            ChunkRecord(content="bad", embedding=[1.0]),
        ]

        with pytest.raises(VectorStoreError):
            await local_vector_store.store_many(test_async_db, document.id, records)

        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == 0

    @pytest.mark.asyncio
    async def test_search_should_reject_wrong_dimension(self, test_async_db, chatbot, local_vector_store):
        with pytest.raises(VectorStoreError):
            await local_vector_store.search(test_async_db, chatbot.id, [1.0, 0.0], 3)


class TestHydration:
    """Attaching documents to hits."""

    @pytest.mark.asyncio
    async def test_hydrate_should_attach_document_and_similarity(
        self, test_async_db, chatbot, local_vector_store
    ):
        document = await _document(test_async_db, chatbot.id, url="https://docs.example.com/x")
        await local_vector_store.store(test_async_db, document.id, "X is a protocol for Y", unit_vector(0))
        await test_async_db.commit()

        results = await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 3)
        chunks = await local_vector_store.hydrate(test_async_db, chatbot.id, results)

        assert len(chunks) == 1
        assert chunks[0].document_url == "https://docs.example.com/x"
        assert chunks[0].content_type == "web_page"
        assert chunks[0].similarity == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_hydrate_should_drop_hits_without_document(
        self, test_async_db, chatbot, local_vector_store
    ):
        document = await _document(test_async_db, chatbot.id)
        await local_vector_store.store(test_async_db, document.id, "orphan", unit_vector(0))
        await test_async_db.commit()
        results = await local_vector_store.search(test_async_db, chatbot.id, unit_vector(0), 3)

        await document_crud.delete_by_id(test_async_db, document.id)
        await test_async_db.commit()

        assert await local_vector_store.hydrate(test_async_db, chatbot.id, results) == []

    @pytest.mark.asyncio
    async def test_delete_by_document_should_remove_chunks(
        self, test_async_db, chatbot, local_vector_store
    ):
        document = await _document(test_async_db, chatbot.id)
        for i in range(3):
            await local_vector_store.store(test_async_db, document.id, f"chunk {i}", unit_vector(i))
        await test_async_db.commit()

        removed = await local_vector_store.delete_by_document(test_async_db, document.id)
        await test_async_db.commit()

        assert removed == 3
        assert await local_vector_store.count_for_chatbot(test_async_db, chatbot.id) == 0
