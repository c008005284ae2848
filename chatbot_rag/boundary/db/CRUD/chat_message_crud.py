"""
Chat message CRUD operations.

Append-only chat history per chatbot session.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.models
System role: Chat history persistence operations
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.boundary.db.CRUD.base_crud import ChatbotScopedCRUD
from chatbot_rag.boundary.db.models.chat_message_model import ChatMessageModel, MessageRole


class ChatMessageCRUD(ChatbotScopedCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        """Initialize ChatMessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def append(
        self,
        session: AsyncSession,
        chatbot_id: int,
        session_id: str,
        role: MessageRole,
        content: str,
        metadata: dict[str, Any] | None = None,
    ) -> ChatMessageModel:
        """
        Append one turn to a session's history.

        Args:
            session: Async database session
            chatbot_id: Owning chatbot
            session_id: Conversation id
            role: user or assistant
            content: Message text
            metadata: Provenance for assistant turns

        Returns:
            Created ChatMessageModel
        """
        return await self.create(
            session,
            chatbot_id=chatbot_id,
            session_id=session_id,
            role=role,
            content=content,
            message_metadata=metadata or {},
        )

    async def get_session_history(
        self,
        session: AsyncSession,
        chatbot_id: int,
        session_id: str,
    ) -> Sequence[ChatMessageModel]:
        """Retrieve a session's messages in creation order."""
        return await self.list_for_chatbot(
            session,
            chatbot_id,
            ChatMessageModel.session_id == session_id,
            order_by=(ChatMessageModel.created_at, ChatMessageModel.id),
        )


chat_message_crud = ChatMessageCRUD()
