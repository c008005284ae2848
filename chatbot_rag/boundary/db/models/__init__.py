"""ORM models."""

from chatbot_rag.boundary.db.models.chatbot_model import ChatbotModel
from chatbot_rag.boundary.db.models.document_model import DocumentModel, DocumentStatus
from chatbot_rag.boundary.db.models.chunk_model import ChunkModel
from chatbot_rag.boundary.db.models.chat_message_model import ChatMessageModel, MessageRole

__all__ = [
    "ChatbotModel",
    "ChatMessageModel",
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "MessageRole",
]
