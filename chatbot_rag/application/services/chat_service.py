"""
Chat service for retrieval-augmented chat.

Orchestrates one chat turn: validation, user-turn persistence, greeting
classification, retrieval, prompt construction, generation with provider
fallback, greeting post-processing, and assistant-turn persistence.

Dependencies: chatbot_rag.application.services.retrieval_service,
    chatbot_rag.core.generation_chain, chatbot_rag.core.chat_prompt, chatbot_rag.boundary.db
System role: Chat service orchestration layer
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_rag.application.services.retrieval_service import RetrievalService
from chatbot_rag.boundary.db.CRUD.chat_message_crud import chat_message_crud
from chatbot_rag.boundary.db.CRUD.chatbot_crud import chatbot_crud
from chatbot_rag.boundary.db.models.chat_message_model import ChatMessageModel, MessageRole
from chatbot_rag.core.chat_prompt import (
    build_answer_prompt,
    build_greeting_prompt,
    is_greeting,
    truncate_sentences,
)
from chatbot_rag.core.exceptions import ChatbotNotFoundError, ValidationError
from chatbot_rag.core.generation_chain import GenerationChain

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ChatResult:
    """Reply text and the session it belongs to."""

    response: str
    session_id: str


class ChatService:
    """
    Chat service for retrieval-augmented Q&A.

    The user turn is committed before generation starts and is kept if
    generation fails. The assistant turn is written only after success.
    """

    def __init__(
        self,
        db: AsyncSession,
        retrieval_service: RetrievalService,
        generation_chain: GenerationChain,
        retrieval_limit: int = 3,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            retrieval_service: Context retrieval
            generation_chain: Prioritized generation providers
            retrieval_limit: Chunks retrieved per message
        """
        self.db = db
        self.retrieval_service = retrieval_service
        self.generation_chain = generation_chain
        self.retrieval_limit = retrieval_limit

    async def process_chat(
        self,
        chatbot_id: int,
        message: str | None,
        session_id: str | None = None,
    ) -> ChatResult:
        """
        Process one chat message.

        Flow:
        1. Validate message and chatbot
        2. Persist user turn (committed)
        3. Greeting: short ungrounded prompt; otherwise retrieve context (limit 3)
        4. Generate through the provider chain
        5. Greeting replies are cut to 3 sentences
        6. Persist assistant turn with source chunk ids and similarities

        Args:
            chatbot_id: Chatbot id
            message: User message
            session_id: Conversation id; generated when absent

        Returns:
            ChatResult: Reply and session id

        Raises:
            ValidationError: Message missing or blank
            ChatbotNotFoundError: Unknown chatbot
            ProviderConfigurationError: No generation (or embedding) key configured
            GenerationError / EmbeddingError: All providers failed
        """
        if message is None or not message.strip():
            raise ValidationError("Message is required", field="message")

        chatbot = await chatbot_crud.get_by_id(self.db, chatbot_id)
        if chatbot is None:
            raise ChatbotNotFoundError(chatbot_id)

        session_id = session_id or uuid.uuid4().hex
        logger.info(f"{__name__}:process_chat - START chatbot_id={chatbot_id} session_id={session_id}")

        await chat_message_crud.append(
            self.db, chatbot_id, session_id, MessageRole.USER, message
        )
        await self.db.commit()

        greeting = is_greeting(message)
        sources: list[dict] = []
        if greeting:
            logger.info(f"{__name__}:process_chat - Greeting detected, skipping retrieval")
            prompt = build_greeting_prompt(chatbot.name, message)
        else:
            chunks = await self.retrieval_service.find_similar(
                message, chatbot_id, self.retrieval_limit
            )
            context = CONTEXT_SEPARATOR.join(chunk.content for chunk in chunks)
            prompt = build_answer_prompt(chatbot.name, context, message)
            sources = [
                {
                    "chunkId": chunk.chunk_id,
                    "documentId": chunk.document_id,
                    "similarity": chunk.similarity,
                }
                for chunk in chunks
            ]
            logger.info(f"{__name__}:process_chat - Context built from {len(chunks)} chunks")

        result = await self.generation_chain.generate(prompt)
        response = truncate_sentences(result.text) if greeting else result.text

        await chat_message_crud.append(
            self.db,
            chatbot_id,
            session_id,
            MessageRole.ASSISTANT,
            response,
            metadata={
                "sourceDocuments": sources,
                "provider": result.provider,
                "greeting": greeting,
            },
        )
        await self.db.commit()

        logger.info(f"{__name__}:process_chat - END session_id={session_id} provider={result.provider}")
        return ChatResult(response=response, session_id=session_id)

    async def get_history(
        self,
        chatbot_id: int,
        session_id: str | None,
    ) -> Sequence[ChatMessageModel]:
        """
        Get a session's messages in creation order.

        Raises:
            ValidationError: session_id missing
            ChatbotNotFoundError: Unknown chatbot
        """
        if not session_id:
            raise ValidationError("Session ID is required", field="sessionId")
        if not await chatbot_crud.exists(self.db, chatbot_id):
            raise ChatbotNotFoundError(chatbot_id)
        return await chat_message_crud.get_session_history(self.db, chatbot_id, session_id)
