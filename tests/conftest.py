"""Shared test fixtures."""

import pytest

from propdoc.config import settings
from propdoc.observability.tracing import mlflow
from propdoc.render.fonts import load_fonts


@pytest.fixture(autouse=True)
def _disable_mlflow_tracing():
    """Disable MLflow tracing during tests — no side effects, no mlruns/ writes."""
    if mlflow is None:
        yield
        return
    mlflow.tracing.disable()
    yield
    mlflow.tracing.enable()


@pytest.fixture(autouse=True)
def _offline_settings(monkeypatch):
    """No test talks to a real summary service unless it patches one in."""
    monkeypatch.setattr(settings, "openrouter_api_key", "")
    monkeypatch.setattr(settings, "paginate", False)
    monkeypatch.setattr(settings, "font_regular_path", "")
    monkeypatch.setattr(settings, "font_bold_path", "")
    monkeypatch.setattr(settings, "suspicious_output_bytes", 100)


@pytest.fixture
def fonts():
    return load_fonts()
