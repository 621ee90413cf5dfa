"""MLflow hooks for the brochure pipeline.

Install the `tracing` extra to record one MLflow run per generated document
(params, summary source tag, size metrics) plus a trace of its stages.
Without mlflow every helper here does nothing, so the API and CLI never
depend on it.

    with start_run(run_name="document_basic"):
        log_params({"template_id": "basic"})
        ...
        log_metrics({"byte_length": 2048.0})
"""

import asyncio
import functools
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

try:
    import mlflow as _mlflow

    mlflow = _mlflow
    _HAS_MLFLOW = True
except ImportError:
    mlflow = None  # type: ignore[assignment]
    _HAS_MLFLOW = False


def trace(name: str | None = None, **kwargs):
    """`mlflow.trace` when available, else a transparent wrapper (sync or async)."""
    if _HAS_MLFLOW:
        return _mlflow.trace(name=name, **kwargs) if name else _mlflow.trace(**kwargs)

    def passthrough(fn):
        if asyncio.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(*args, **kw):
                return await fn(*args, **kw)
            return async_wrapper

        @functools.wraps(fn)
        def wrapper(*args, **kw):
            return fn(*args, **kw)
        return wrapper

    return passthrough


@contextmanager
def start_run(**kwargs):
    """Scope tags, params and metrics to one run; closed on exit, even on error."""
    if _HAS_MLFLOW:
        with _mlflow.start_run(**kwargs) as run:
            yield run
    else:
        yield None


@contextmanager
def start_span(name: str = "span", **kwargs):
    if _HAS_MLFLOW:
        with _mlflow.start_span(name=name, **kwargs) as span:
            yield span
    else:
        yield _NoOpSpan()


# Run bookkeeping. Tracking-store failures are logged at debug and never
# reach the pipeline.

def log_params(params: dict) -> None:
    if _HAS_MLFLOW:
        try:
            _mlflow.log_params(params)
        except Exception as e:
            logger.debug("Could not record params %s: %s", sorted(params), e)


def log_metrics(metrics: dict, step: int | None = None) -> None:
    if _HAS_MLFLOW:
        try:
            _mlflow.log_metrics(metrics, step=step)
        except Exception as e:
            logger.debug("Could not record metrics %s: %s", sorted(metrics), e)


def set_tag(key: str, value: str) -> None:
    if _HAS_MLFLOW:
        try:
            _mlflow.set_tag(key, value)
        except Exception as e:
            logger.debug("Could not set tag %s: %s", key, e)


def init_tracing(tracking_uri: str, experiment_name: str) -> bool:
    """Point MLflow at the configured store and experiment.

    Returns False (and configures nothing) when mlflow is not installed.
    """
    if not _HAS_MLFLOW:
        return False
    _mlflow.set_tracking_uri(tracking_uri)
    _mlflow.set_experiment(experiment_name)
    _mlflow.config.enable_async_logging()
    return True


class _NoOpSpan:
    """Stands in for an MLflow span when tracing is off."""

    def set_inputs(self, inputs: dict) -> None:
        pass

    def set_outputs(self, outputs: dict) -> None:
        pass
