"""propdoc API — FastAPI application for property brochure generation.

Run:
    uvicorn propdoc.api.main:app --reload
    # or
    propdoc-api
"""

import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from propdoc.api.routes import router
from propdoc.config import settings
from propdoc.observability.logging import correlation_id, setup_logging
from propdoc.observability.tracing import init_tracing
from propdoc.templates.registry import default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and tracing on startup."""
    setup_logging(json_format=settings.log_json, level=settings.log_level)

    if init_tracing(settings.mlflow_tracking_uri, settings.mlflow_experiment_name):
        logger.info("MLflow tracing enabled: %s", settings.mlflow_tracking_uri)
    else:
        logger.info("MLflow not installed — tracing disabled")

    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY not set — every summary will use fallback text")
    logger.info("propdoc API ready (%d templates)", len(default_registry))
    yield
    logger.info("Shutting down")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Set correlation ID from X-Request-ID header or generate a new one."""

    async def dispatch(self, request: Request, call_next):
        cid = request.headers.get("x-request-id", str(uuid.uuid4()))
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = cid
            return response
        finally:
            correlation_id.reset(token)


app = FastAPI(
    title="propdoc",
    description="Property brochure generation: template merge, AI listing summary and PDF layout.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Summary-Source", "X-Document-Warnings"],
)

app.include_router(router)


@app.get("/health")
async def health():
    """Liveness plus a summary of what the service can do right now."""
    return {
        "status": "healthy",
        "templates": len(default_registry),
        "summary_service": "configured" if settings.openrouter_api_key else "fallback_only",
    }


def run():
    """Entry point for propdoc-api console script."""
    uvicorn.run("propdoc.api.main:app", host="0.0.0.0", port=8000)
