"""
Test suite for correlation IDs and logging helpers.

System role: Verification of observability utilities
"""

import logging

from chatbot_rag.observability import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from chatbot_rag.observability.correlation import correlation_scope
from chatbot_rag.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from chatbot_rag.observability.logger import CorrelationIdFilter, configure_logging


class TestCorrelationId:
    """Context-local correlation IDs."""

    def test_set_should_generate_id_when_missing(self):
        value = set_correlation_id()
        try:
            assert value
            assert get_correlation_id() == value
        finally:
            clear_correlation_id()

    def test_set_should_keep_caller_id(self):
        set_correlation_id("trace-42")
        try:
            assert get_correlation_id() == "trace-42"
        finally:
            clear_correlation_id()
        assert get_correlation_id() == ""

    def test_unsafe_inbound_id_should_be_replaced(self):
        value = set_correlation_id("evil\nINFO forged line")
        try:
            assert value != "evil\nINFO forged line"
            assert len(value) == 32
        finally:
            clear_correlation_id()

    def test_scope_should_restore_previous_id(self):
        set_correlation_id("outer")
        try:
            with correlation_scope("inner") as inner:
                assert inner == "inner"
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"
        finally:
            clear_correlation_id()

    def test_filter_should_stamp_records(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        set_correlation_id("trace-7")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()

        assert record.correlation_id == "trace-7"

    def test_filter_should_use_placeholder_outside_requests(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestSafeLogValue:
    """Value summarizing for log context."""

    def test_collections_should_be_summarized(self):
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_long_strings_should_be_truncated(self):
        value = safe_log_value("x" * 600, max_length=10)
        assert value.startswith("xxxxxxxxxx... (truncated, 600 total)")

    def test_exception_context_should_be_attached(self, caplog):
        logger = logging.getLogger("tests.observability")

        with caplog.at_level(logging.ERROR, logger="tests.observability"):
            log_exception_with_context(logger, "Document failed", ValueError("bad chunk"), document_id=9)

        record = caplog.records[0]
        assert record.error_type == "ValueError"
        assert record.document_id == "9"

    def test_reserved_context_keys_should_be_prefixed(self, caplog):
        logger = logging.getLogger("tests.observability")

        with caplog.at_level(logging.INFO, logger="tests.observability"):
            log_with_context(logger, logging.INFO, "Crawled page", filename="index.html", pages=[1, 2])

        record = caplog.records[0]
        assert record.ctx_filename == "index.html"
        assert record.pages == "list(2 items)"


class TestConfigureLogging:
    """Root handler setup."""

    def test_repeated_calls_should_leave_one_correlated_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("debug")
            configure_logging("debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
