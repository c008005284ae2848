"""
Root logging configuration.

One stdout handler with ISO-style timestamps and the request correlation
ID in every line. Chatty client libraries are held at WARNING.

Dependencies: logging (stdlib), chatbot_rag.observability.correlation
System role: Centralized logging configuration
"""

import logging
import logging.config

from chatbot_rag.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID ("-" outside a request) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Replace root handlers with the service's stdout handler.

    Safe to call repeatedly; each call rebuilds the same configuration.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ...)
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"correlation": {"()": CorrelationIdFilter}},
        "formatters": {
            "service": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%dT%H:%M:%S"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "service",
                "filters": ["correlation"],
            },
        },
        "root": {"level": level.upper(), "handlers": ["stdout"]},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    })
