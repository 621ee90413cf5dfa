"""Observability: structured logging, optional MLflow tracing, prompt registry."""
