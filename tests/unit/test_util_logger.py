"""
LoggerFactory and JSONFormatter tests.
"""

import json
import logging

import pytest

from util_logger import ComponentType, JSONFormatter, LogContext, LoggerFactory


class _ListHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    logger = LoggerFactory.create_logger(ComponentType.SERVICE, "LoggerUnderTest")
    handler = _ListHandler()
    logger.addHandler(handler)
    yield logger, handler.records
    logger.removeHandler(handler)


class TestLoggerFactory:

    def test_logger_name_and_single_json_handler(self):
        first = LoggerFactory.create_logger(ComponentType.REPOSITORY, "Twice")
        second = LoggerFactory.create_logger(ComponentType.REPOSITORY, "Twice")
        assert first is second
        assert first.name == "repository.Twice"
        json_handlers = [h for h in first.handlers if isinstance(h.formatter, JSONFormatter)]
        assert len(json_handlers) == 1
        assert first.propagate is False

    def test_component_dimensions_without_context(self, captured):
        logger, records = captured
        logger.info("plain")
        assert records[-1].custom_dimensions == {
            "component_type": "service",
            "component_name": "LoggerUnderTest",
        }

    def test_per_call_context_merged(self, captured):
        logger, records = captured
        extra = LogContext(namespace="org_acme_corp", tenant_slug="acme-corp", run_id="ab12").as_extra(phase="tables")
        logger.info("with context", extra=extra)
        dims = records[-1].custom_dimensions
        assert dims["namespace"] == "org_acme_corp"
        assert dims["tenant_slug"] == "acme-corp"
        assert dims["run_id"] == "ab12"
        assert dims["phase"] == "tables"
        assert dims["component_name"] == "LoggerUnderTest"

    def test_context_does_not_leak_between_calls(self, captured):
        logger, records = captured
        logger.info("first", extra=LogContext(namespace="org_a").as_extra())
        logger.info("second", extra=LogContext(namespace="org_b").as_extra())
        assert [r.custom_dimensions["namespace"] for r in records[-2:]] == ["org_a", "org_b"]


class TestJSONFormatter:

    def test_custom_dimensions_rendered(self, captured):
        logger, records = captured
        logger.warning("⚠️ drift", extra=LogContext(namespace="org_a", dry_run=True).as_extra())
        payload = json.loads(JSONFormatter().format(records[-1]))
        assert payload["level"] == "WARNING"
        assert payload["message"] == "⚠️ drift"
        assert payload["logger"] == "service.LoggerUnderTest"
        assert payload["customDimensions"]["namespace"] == "org_a"
        assert payload["customDimensions"]["dry_run"] is True
