"""Tests for observability: prompt registry, JSON logging and tracing hooks."""

import json
import logging
from unittest.mock import patch

import pytest

from propdoc.observability.logging import (
    JSONFormatter,
    correlation_id,
    get_correlation_id,
    setup_logging,
)
from propdoc.observability.prompts import (
    get_active_prompt,
    get_prompt_version,
    list_prompts,
)
from propdoc.observability.tracing import log_metrics, log_params, set_tag, start_run, trace


def _record(msg: str = "hi", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="propdoc.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestPromptRegistry:
    def test_listing_summary_prompt(self):
        prompt = get_active_prompt("listing_summary")
        assert "real estate copywriter" in prompt.system
        user = prompt.render_user(title="Sunny Villa", address="123 Lake Rd")
        assert "Sunny Villa located at 123 Lake Rd" in user
        assert "2-3 sentence" in user

    def test_get_prompt_version(self):
        assert get_prompt_version("listing_summary") == "v1"

    def test_list_prompts(self):
        assert list_prompts() == [{"name": "listing_summary", "version": "v1"}]

    def test_unknown_prompt_raises(self):
        with pytest.raises(KeyError, match="Unknown prompt"):
            get_active_prompt("nonexistent")


class TestJSONFormatter:
    def test_json_formatter_output(self):
        """JSONFormatter produces valid JSON with required fields."""
        parsed = json.loads(JSONFormatter().format(_record("test message")))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "propdoc.test"
        assert parsed["message"] == "test message"
        assert "timestamp" in parsed
        assert "correlation_id" not in parsed

    def test_json_formatter_includes_correlation_id(self):
        token = correlation_id.set("test-123")
        try:
            parsed = json.loads(JSONFormatter().format(_record()))
            assert parsed["correlation_id"] == "test-123"
        finally:
            correlation_id.reset(token)

    def test_pipeline_extras(self):
        record = _record(template_id="basic", step="rendered", duration_ms=12.5, byte_length=2048)
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["template_id"] == "basic"
        assert parsed["step"] == "rendered"
        assert parsed["duration_ms"] == 12.5
        assert parsed["byte_length"] == 2048
        assert "summary_source" not in parsed

    async def test_correlation_id_propagation(self):
        """ContextVar propagates correlation ID across async chain."""
        results = []

        async def inner():
            results.append(get_correlation_id())

        token = correlation_id.set("async-456")
        try:
            await inner()
        finally:
            correlation_id.reset(token)

        assert results == ["async-456"]
        assert get_correlation_id() == ""

    def test_setup_logging_json(self):
        setup_logging(json_format=True, level="WARNING")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
        # Restore default for other tests
        setup_logging(json_format=False, level="INFO")


class TestTracingWithoutMlflow:
    def test_start_run_yields_none(self):
        with patch("propdoc.observability.tracing._HAS_MLFLOW", False):
            with start_run(run_name="document_basic") as run:
                assert run is None

    def test_helpers_are_noops(self):
        with patch("propdoc.observability.tracing._HAS_MLFLOW", False):
            log_params({"template_id": "basic"})
            log_metrics({"byte_length": 1.0})
            set_tag("summary_source", "fallback")

    async def test_passthrough_keeps_coroutine(self):
        with patch("propdoc.observability.tracing._HAS_MLFLOW", False):
            @trace(name="double")
            async def double(x):
                return x * 2

        assert await double(21) == 42
