"""
Chat message ORM model.

Append-only log of chat turns per chatbot session. Assistant turns carry
provenance metadata: the chunks and similarity scores used as context.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.base
System role: Chat history persistence
"""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chatbot_rag.boundary.db.base import Base, IntIDMixin, TimestampMixin


class MessageRole(str, enum.Enum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessageModel(Base, IntIDMixin, TimestampMixin):
    """Chat message ORM model."""

    __tablename__ = "chat_messages"

    chatbot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("chatbots.id", ondelete="CASCADE"),
        nullable=False,
    )

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, native_enum=False),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    message_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )
