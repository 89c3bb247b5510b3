"""
Structured logger tests.
"""

import json
import logging

import pytest

from util_logger import (
    ComponentType,
    JSONFormatter,
    LogContext,
    LoggerFactory,
    log_exceptions,
)


class TestLoggerFactory:

    def test_handler_added_once(self):
        LoggerFactory.create_logger(ComponentType.CORE, "HandlerOnce")
        adapter = LoggerFactory.create_logger(ComponentType.CORE, "HandlerOnce")
        json_handlers = [h for h in adapter.logger.handlers if isinstance(h.formatter, JSONFormatter)]
        assert len(json_handlers) == 1

    def test_context_dimensions_injected(self):
        adapter = LoggerFactory.create_with_context(
            ComponentType.SERVICE, "Ctx", invocation_id="abc", archive_key="batch.zip"
        )
        _, kwargs = adapter.process("msg", {"extra": {"custom_dimensions": {"stage": "evaluated"}}})
        dims = kwargs["extra"]["custom_dimensions"]
        assert dims["invocation_id"] == "abc"
        assert dims["archive_key"] == "batch.zip"
        assert dims["stage"] == "evaluated"
        assert dims["component_type"] == ComponentType.SERVICE.value

    def test_log_context_drops_none(self):
        assert LogContext(invocation_id="x").to_dict() == {"invocation_id": "x"}


class TestJSONFormatter:

    def test_json_output_with_dimensions(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.custom_dimensions = {"stage": "allocated"}
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["customDimensions"] == {"stage": "allocated"}


class TestLogExceptions:

    def test_reraises(self):
        @log_exceptions(ComponentType.CORE, "Boom")
        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            boom()
