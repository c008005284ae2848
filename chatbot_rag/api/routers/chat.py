"""Chat API endpoints.

Routes:
- POST /chatbots/{chatbot_id}/chat - Send a message, get a grounded reply
- GET /chatbots/{chatbot_id}/chat?sessionId=... - Conversation history

Dependencies: chatbot_rag.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from chatbot_rag.api.deps import get_chat_service
from chatbot_rag.api.routers.error_handling import handle_rag_errors, parse_chatbot_id
from chatbot_rag.application.services.chat_service import ChatService
from chatbot_rag.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbots", tags=["chat"])


@router.post("/{chatbot_id}/chat", response_model=ChatResponse)
@handle_rag_errors
async def chat(
    chatbot_id: str,
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Send a chat message to a chatbot.

    Args:
        chatbot_id: Chatbot id path segment
        request: ChatRequest with message and optional sessionId
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Reply and the session id to continue with

    Raises:
        HTTPException(400): Invalid chatbot id or missing message
        HTTPException(404): Chatbot not found
        HTTPException(429/401/504/500): Provider failures
    """
    result = await chat_service.process_chat(
        chatbot_id=parse_chatbot_id(chatbot_id),
        message=request.message,
        session_id=request.session_id,
    )
    return ChatResponse(response=result.response, session_id=result.session_id)


@router.get("/{chatbot_id}/chat", response_model=ChatHistoryResponse)
@handle_rag_errors
async def get_chat_history(
    chatbot_id: str,
    session_id: str | None = Query(default=None, alias="sessionId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """Get a session's messages, oldest first."""
    messages = await chat_service.get_history(parse_chatbot_id(chatbot_id), session_id)
    return ChatHistoryResponse(
        session_id=session_id,
        messages=[
            ChatMessageResponse(
                id=message.id,
                role=message.role.value,
                content=message.content,
                metadata=message.message_metadata or {},
                created_at=message.created_at,
            )
            for message in messages
        ],
        total=len(messages),
    )
