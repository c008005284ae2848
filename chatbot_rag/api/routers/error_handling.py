"""
RAG error handling utilities.

Provides a decorator that maps domain exceptions to HTTP errors with
short client-facing messages, and chatbot id parsing for path params.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from chatbot_rag.core.exceptions import (
    ChatbotNotFoundError,
    DocumentNotFoundError,
    ProviderChainError,
    ProviderConfigurationError,
    ProviderErrorKind,
    SourceConfigurationError,
    SourceExtractionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_CHAIN_STATUS = {
    ProviderErrorKind.QUOTA: status.HTTP_429_TOO_MANY_REQUESTS,
    ProviderErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ProviderErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}

_CHAIN_DETAIL = {
    ProviderErrorKind.QUOTA: "AI service quota exceeded. Please try again later.",
    ProviderErrorKind.AUTH: "Authentication error with AI service.",
    ProviderErrorKind.TIMEOUT: "AI service timed out. Please try again later.",
}


def parse_chatbot_id(raw: str) -> int:
    """
    Parse a chatbot id path segment.

    Raises:
        ValidationError: Segment is not a positive integer
    """
    try:
        chatbot_id = int(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid chatbot ID", field="chatbot_id") from e
    if chatbot_id <= 0:
        raise ValidationError("Invalid chatbot ID", field="chatbot_id")
    return chatbot_id


def handle_rag_errors(func: F) -> F:
    """
    Decorator to handle RAG errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (stage, provider failures)
    - Mapping exception types and provider failure kinds to status codes
    - Keeping internal details out of response bodies
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except (ChatbotNotFoundError, DocumentNotFoundError) as e:
            logger.warning("Resource not found", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ProviderChainError as e:
            kind = e.kind
            logger.error(
                f"{e.stage} failed for all providers",
                extra={"stage": e.stage, "kind": kind.value, "error": str(e)},
            )
            raise HTTPException(
                status_code=_CHAIN_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
                detail=_CHAIN_DETAIL.get(kind, f"Failed to complete {e.stage}. Please try again later."),
            )

        except (ProviderConfigurationError, SourceConfigurationError) as e:
            logger.error("Service misconfigured", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except SourceExtractionError as e:
            logger.error("Source extraction failed", extra={"error": str(e)})
            code = status.HTTP_400_BAD_REQUEST if e.status_code == 404 else status.HTTP_502_BAD_GATEWAY
            raise HTTPException(status_code=code, detail=e.message)

        except HTTPException:
            raise

        except Exception as e:
            logger.exception("Unexpected failure in RAG operation", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
