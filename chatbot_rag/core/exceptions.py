"""
Exception hierarchy for the chatbot RAG backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any, Sequence


class ChatbotRAGException(Exception):
    """Base exception for all chatbot RAG application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ChatbotRAGException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChatbotNotFoundError(ChatbotRAGException):
    """Raised when a chatbot cannot be found."""

    def __init__(self, chatbot_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["chatbot_id"] = chatbot_id
        super().__init__("Chatbot not found", details)


class DocumentNotFoundError(ChatbotRAGException):
    """Raised when a document does not exist for the requesting chatbot."""

    def __init__(
        self,
        document_id: int,
        chatbot_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["document_id"] = document_id
        if chatbot_id is not None:
            details["chatbot_id"] = chatbot_id
        super().__init__("Document not found", details)


class ProviderErrorKind(str, enum.Enum):
    """
    Failure classes for a single provider call.

    TRANSIENT: network failure or non-2xx status
    QUOTA: rate limiting or exhausted quota
    AUTH: rejected credentials
    MALFORMED: HTML or non-JSON body, missing fields, wrong vector length
    TIMEOUT: no response within the configured timeout
    """

    TRANSIENT = "transient"
    QUOTA = "quota"
    AUTH = "auth"
    MALFORMED = "malformed"
    TIMEOUT = "timeout"


class ProviderError(ChatbotRAGException):
    """Raised when one provider call fails. Always triggers fallback."""

    def __init__(
        self,
        provider: str,
        kind: ProviderErrorKind,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            provider: Provider name (e.g. "openai", "gemini")
            kind: Failure classification
            message: Error message from the provider or transport
            status_code: HTTP status code if a response was received
            details: Additional context
        """
        self.provider = provider
        self.kind = kind
        self.status_code = status_code
        details = details or {}
        details.update({"provider": provider, "kind": kind.value})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class ProviderConfigurationError(ChatbotRAGException):
    """Raised when no provider has an API key for the requested stage. Never retried."""

    def __init__(self, stage: str, details: dict[str, Any] | None = None) -> None:
        self.stage = stage
        details = details or {}
        details["stage"] = stage
        super().__init__(f"No {stage} provider API key is configured", details)


class ProviderChainError(ChatbotRAGException):
    """
    Raised when every configured provider of a stage failed.

    Carries each provider's failure; the resolved kind decides the HTTP
    status at the API boundary.
    """

    stage = "provider"

    def __init__(
        self,
        failures: Sequence[ProviderError],
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize aggregated provider failure.

        Args:
            failures: Failures in provider priority order
            details: Additional context
        """
        self.failures = list(failures)
        summary = "; ".join(
            f"{failure.provider} ({failure.kind.value}): {failure.message}"
            for failure in self.failures
        )
        details = details or {}
        details["stage"] = self.stage
        details["providers"] = [failure.provider for failure in self.failures]
        super().__init__(
            f"{self.stage.capitalize()} failed for all providers: {summary}",
            details,
        )

    @property
    def kind(self) -> ProviderErrorKind:
        """Quota wins over auth, auth over timeout, otherwise transient."""
        kinds = {failure.kind for failure in self.failures}
        if ProviderErrorKind.QUOTA in kinds:
            return ProviderErrorKind.QUOTA
        if ProviderErrorKind.AUTH in kinds:
            return ProviderErrorKind.AUTH
        if kinds == {ProviderErrorKind.TIMEOUT}:
            return ProviderErrorKind.TIMEOUT
        return ProviderErrorKind.TRANSIENT

    @property
    def is_quota(self) -> bool:
        return self.kind is ProviderErrorKind.QUOTA


class EmbeddingError(ProviderChainError):
    """Raised when embedding generation fails on every provider."""

    stage = "embedding"


class GenerationError(ProviderChainError):
    """Raised when text generation fails on every provider."""

    stage = "generation"


class VectorStoreError(ChatbotRAGException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (store, search, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(ChatbotRAGException):
    """Raised when retrieval operations fail."""

    def __init__(
        self,
        message: str,
        chatbot_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if chatbot_id is not None:
            details["chatbot_id"] = chatbot_id
        super().__init__(message, details)


class SourceExtractionError(ChatbotRAGException):
    """Raised when a GitHub repository or website cannot be read."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        details = details or {}
        if source:
            details["source"] = source
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class SourceConfigurationError(ChatbotRAGException):
    """Raised when a source extractor is missing required configuration."""

    pass
