"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, IntIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ChatbotModel, DocumentModel, ChunkModel, ChatMessageModel: Core domain entities
  - DocumentStatus, MessageRole: Enum types
  - chatbot_crud, document_crud, chunk_crud, chat_message_crud: CRUD operation singletons

Dependencies: sqlalchemy, chatbot_rag.configs
System role: Database adapter for tenants, documents, chunks, and chat history
"""

from chatbot_rag.boundary.db.base import Base, IntIDMixin, TimestampMixin
from chatbot_rag.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from chatbot_rag.boundary.db.models import (
    ChatbotModel,
    ChatMessageModel,
    ChunkModel,
    DocumentModel,
    DocumentStatus,
    MessageRole,
)
from chatbot_rag.boundary.db.CRUD import (
    BaseCRUD,
    chat_message_crud,
    chatbot_crud,
    chunk_crud,
    document_crud,
)

__all__ = [
    "Base",
    "IntIDMixin",
    "TimestampMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChatbotModel",
    "ChatMessageModel",
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "MessageRole",
    "BaseCRUD",
    "chat_message_crud",
    "chatbot_crud",
    "chunk_crud",
    "document_crud",
]
