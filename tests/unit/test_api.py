"""Unit tests for the propdoc API endpoints.

Uses httpx.AsyncClient with ASGITransport to test FastAPI endpoints
without starting a real server. The pipeline is mocked except where noted.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from propdoc.api.main import app
from propdoc.core.errors import (
    AssetUnavailable,
    PipelineWarning,
    TemplateNotFound,
    UnsupportedAsset,
    WarningKind,
)
from propdoc.core.types import GeneratedDocument, SummaryResult, SummarySource

REQUEST = {
    "template_id": "basic",
    "project": {
        "title": "Sunny Villa",
        "address": "123 Lake Rd",
        "website": "sunnyvilla.example",
        "email": "info@example.com",
    },
}


def _mock_document() -> GeneratedDocument:
    return GeneratedDocument(
        content=b"%PDF-1.4 mock brochure",
        summary=SummaryResult(text="A bright lakeside home.", source=SummarySource.GENERATED),
        template_id="basic",
        line_count=7,
        warnings=[PipelineWarning(kind=WarningKind.RENDER_WARNING, message="Skipped line")],
    )


@pytest.fixture
def transport():
    return ASGITransport(app=app)


@pytest.fixture
async def client(transport):
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health(client):
    """Health reports template count and summary availability."""
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["templates"] == 3
    assert data["summary_service"] == "fallback_only"


@pytest.mark.asyncio
async def test_health_echoes_request_id(client):
    resp = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert resp.headers["x-request-id"] == "req-42"


@pytest.mark.asyncio
async def test_list_templates(client):
    resp = await client.get("/api/v1/templates")
    assert resp.status_code == 200
    data = resp.json()
    assert [t["id"] for t in data] == ["basic", "classic", "colorful"]
    assert data[0]["placeholders"] == ["title", "summary", "website", "email", "address"]
    assert "descriptionextralarge" in data[1]["placeholders"]


@pytest.mark.asyncio
async def test_create_document_success(client):
    """Successful generation returns the PDF as an attachment."""
    with patch("propdoc.api.routes.generate_document", new_callable=AsyncMock,
               return_value=_mock_document()) as gen:
        resp = await client.post("/api/v1/documents", json=REQUEST)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'attachment; filename="basic.pdf"'
    assert resp.headers["x-summary-source"] == "generated"
    assert resp.headers["x-document-warnings"] == "1"
    assert resp.content == b"%PDF-1.4 mock brochure"

    template_id, project = gen.call_args.args
    assert template_id == "basic"
    assert project.title == "Sunny Villa"
    assert project.phone == ""
    assert gen.call_args.kwargs["paginate"] is None


@pytest.mark.asyncio
async def test_create_document_real_pipeline(client):
    """No mocks: bundled template, fallback summary, real PDF."""
    resp = await client.post("/api/v1/documents", json=REQUEST)
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF-")
    assert len(resp.content) > 100
    assert resp.headers["x-summary-source"] == "fallback"


@pytest.mark.asyncio
async def test_create_document_missing_title(client):
    """Empty title fails request validation."""
    body = {"template_id": "basic", "project": {"title": ""}}
    resp = await client.post("/api/v1/documents", json=body)
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("error, status", [
    (TemplateNotFound("nope"), 404),
    (UnsupportedAsset("Template asset is empty"), 422),
    (AssetUnavailable("https://cdn.example/t.html", "HTTP 503", status_code=503), 502),
    (RuntimeError("renderer exploded"), 500),
])
async def test_create_document_errors(client, error, status):
    with patch("propdoc.api.routes.generate_document", new_callable=AsyncMock, side_effect=error):
        resp = await client.post("/api/v1/documents", json=REQUEST)
    assert resp.status_code == status
    assert resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_document_unknown_template_detail(client):
    resp = await client.post("/api/v1/documents", json={**REQUEST, "template_id": "nope"})
    assert resp.status_code == 404
    assert "nope" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_document_timeout(client):
    async def slow(*args, **kwargs):
        await asyncio.sleep(5)

    with patch("propdoc.api.routes.PIPELINE_TIMEOUT", 0.05), \
         patch("propdoc.api.routes.generate_document", new_callable=AsyncMock, side_effect=slow):
        resp = await client.post("/api/v1/documents", json=REQUEST)
    assert resp.status_code == 504
