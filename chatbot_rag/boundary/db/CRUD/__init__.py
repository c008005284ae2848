"""CRUD classes and singletons."""

from chatbot_rag.boundary.db.CRUD.base_crud import BaseCRUD, ChatbotScopedCRUD
from chatbot_rag.boundary.db.CRUD.chat_message_crud import ChatMessageCRUD, chat_message_crud
from chatbot_rag.boundary.db.CRUD.chatbot_crud import ChatbotCRUD, chatbot_crud
from chatbot_rag.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from chatbot_rag.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "ChatbotScopedCRUD",
    "ChatMessageCRUD",
    "ChatbotCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "chat_message_crud",
    "chatbot_crud",
    "chunk_crud",
    "document_crud",
]
