"""
Chatbot ORM model.

The tenancy boundary: documents, chunks, and chat history are all
scoped to one chatbot.

Dependencies: sqlalchemy, chatbot_rag.boundary.db.base
System role: Tenant persistence
"""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatbot_rag.boundary.db.base import Base, IntIDMixin, TimestampMixin


class ChatbotModel(Base, IntIDMixin, TimestampMixin):
    """
    Chatbot ORM model.

    Attributes:
        id: Integer primary key used in /chatbots/{id} routes
        name: Display name, used as the assistant identity in prompts
        description: Optional free-text description
        chatbot_metadata: Arbitrary JSON settings (column "metadata")

    Relationships:
        documents: Owned DocumentModels (cascade delete)
    """

    __tablename__ = "chatbots"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    chatbot_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    documents = relationship(
        "DocumentModel",
        back_populates="chatbot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
