"""
Test suite for DocumentCRUD against an in-memory database.

System role: Verification of document persistence and status tracking
"""

import pytest

from chatbot_rag.boundary.db.CRUD.chunk_crud import chunk_crud
from chatbot_rag.boundary.db.CRUD.document_crud import document_crud
from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.document_model import DocumentStatus
from conftest import unit_vector


async def _create(session, chatbot_id: int, **kwargs):
    fields = {"chatbot_id": chatbot_id, "content": "Body text.", **kwargs}
    document = await document_crud.create(session, **fields)
    await session.commit()
    return document


class TestDocumentCreate:
    """Defaults on insert."""

    @pytest.mark.asyncio
    async def test_new_document_should_default_to_pending_web_page(self, test_async_db, chatbot):
        document = await _create(test_async_db, chatbot.id)

        assert document.status is DocumentStatus.PENDING
        assert document.content_type == "web_page"
        assert document.chunk_count == 0
        assert document.document_metadata == {}


class TestDocumentStatusTransitions:
    """Status updates."""

    @pytest.mark.asyncio
    async def test_mark_completed_should_record_chunk_count(self, test_async_db, chatbot):
        document = await _create(test_async_db, chatbot.id)

        await document_crud.mark_processing(test_async_db, document.id)
        updated = await document_crud.mark_completed(test_async_db, document.id, chunk_count=4)

        assert updated.status is DocumentStatus.COMPLETED
        assert updated.chunk_count == 4
        assert updated.error_message is None

    @pytest.mark.asyncio
    async def test_mark_failed_should_record_error(self, test_async_db, chatbot):
        document = await _create(test_async_db, chatbot.id)

        updated = await document_crud.mark_failed(test_async_db, document.id, "Embedding failed")

        assert updated.status is DocumentStatus.FAILED
        assert updated.error_message == "Embedding failed"
        assert updated.chunk_count == 0

    @pytest.mark.asyncio
    async def test_update_missing_document_should_return_none(self, test_async_db, chatbot):
        assert await document_crud.mark_processing(test_async_db, 9999) is None


class TestDocumentScoping:
    """Chatbot-scoped reads."""

    @pytest.mark.asyncio
    async def test_get_for_chatbot_should_enforce_ownership(self, test_async_db, chatbot, other_chatbot):
        document = await _create(test_async_db, chatbot.id)

        assert (await document_crud.get_for_chatbot(test_async_db, chatbot.id, document.id)).id == document.id
        assert await document_crud.get_for_chatbot(test_async_db, other_chatbot.id, document.id) is None

    @pytest.mark.asyncio
    async def test_get_by_chatbot_id_should_list_newest_first(self, test_async_db, chatbot, other_chatbot):
        first = await _create(test_async_db, chatbot.id, url="https://a")
        second = await _create(test_async_db, chatbot.id, url="https://b")
        await _create(test_async_db, other_chatbot.id, url="https://c")

        documents = await document_crud.get_by_chatbot_id(test_async_db, chatbot.id)

        assert [document.id for document in documents] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_embedding_counts_should_group_by_document(self, test_async_db, chatbot):
        with_chunks = await _create(test_async_db, chatbot.id)
        without_chunks = await _create(test_async_db, chatbot.id)
        test_async_db.add_all([
            ChunkModel(document_id=with_chunks.id, chunk_index=i, content=f"c{i}", embedding=unit_vector(i))
            for i in range(3)
        ])
        await test_async_db.commit()

        counts = await document_crud.embedding_counts(test_async_db, chatbot.id)

        assert counts == {with_chunks.id: 3}
        assert without_chunks.id not in counts
        assert await chunk_crud.count_for_chatbot(test_async_db, chatbot.id) == 3

    @pytest.mark.asyncio
    async def test_get_many_for_chatbot_should_drop_foreign_ids(self, test_async_db, chatbot, other_chatbot):
        mine = await _create(test_async_db, chatbot.id)
        theirs = await _create(test_async_db, other_chatbot.id)

        documents = await document_crud.get_many_for_chatbot(
            test_async_db, chatbot.id, {mine.id, theirs.id, 9999}
        )

        assert [document.id for document in documents] == [mine.id]
        assert await document_crud.get_many_for_chatbot(test_async_db, chatbot.id, set()) == []

    @pytest.mark.asyncio
    async def test_delete_for_chatbot_should_require_ownership(self, test_async_db, chatbot, other_chatbot):
        document = await _create(test_async_db, chatbot.id)

        assert not await document_crud.delete_for_chatbot(test_async_db, other_chatbot.id, document.id)
        assert await document_crud.exists(test_async_db, document.id)

        assert await document_crud.delete_for_chatbot(test_async_db, chatbot.id, document.id)
        assert not await document_crud.exists(test_async_db, document.id)
