# ============================================================================
# LOGGING TESTS
# ============================================================================
# EPOCH: 1 - SCRIPT GENERATION
# STATUS: Tests - Structured logging
# PURPOSE: Verify context fields reach log records
# CREATED: 19 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

from core.logging import ComponentType, StructuredFormatter, get_logger, log_context


class TestContextLogger:
    def test_context_and_component_attached(self, caplog):
        logger = get_logger("tests.logging", ComponentType.SERVICE)

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            with log_context(database="Sales", table="[dbo].[T]"):
                logger.info("encoding rows")

        record = caplog.records[-1]
        assert record.extra["database"] == "Sales"
        assert record.extra["table"] == "[dbo].[T]"
        assert record.extra["component"] == "service"

    def test_caller_extra_not_modified(self, caplog):
        logger = get_logger("tests.logging", ComponentType.REPOSITORY)
        caller_extra = {"rows": 3}

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            with log_context(operation="insert"):
                logger.info("drained", extra=caller_extra)

        assert caller_extra == {"rows": 3}
        record = caplog.records[-1]
        assert record.extra["rows"] == 3
        assert record.extra["operation"] == "insert"


class TestStructuredFormatter:
    def test_json_includes_context(self):
        record = logging.LogRecord("tests.logging", logging.WARNING, __file__, 1, "skipped", None, None)
        with log_context(operation="drop"):
            data = json.loads(StructuredFormatter(include_source=False).format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "skipped"
        assert data["context"] == {"operation": "drop"}
