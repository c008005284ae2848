"""
Chat domain models and schemas.

Request/response schemas for chat operations. JSON field names are
camelCase for the embeddable widget.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages. Missing message is reported as 400."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(default=None, description="User question or message")
    session_id: str | None = Field(
        default=None,
        alias="sessionId",
        description="Conversation id; generated when absent",
    )


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    session_id: str = Field(alias="sessionId")


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(alias="createdAt")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
