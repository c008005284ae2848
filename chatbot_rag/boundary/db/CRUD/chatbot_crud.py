"""
Chatbot CRUD operations.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.models
System role: Chatbot (tenant) persistence operations
"""

from chatbot_rag.boundary.db.CRUD.base_crud import BaseCRUD
from chatbot_rag.boundary.db.models.chatbot_model import ChatbotModel


class ChatbotCRUD(BaseCRUD[ChatbotModel]):
    """CRUD operations for ChatbotModel."""

    def __init__(self) -> None:
        """Initialize ChatbotCRUD with ChatbotModel."""
        super().__init__(ChatbotModel)


chatbot_crud = ChatbotCRUD()
