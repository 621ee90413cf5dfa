"""API route handlers for propdoc.

GET  /api/v1/templates — built-in template catalog
POST /api/v1/documents — generate a brochure PDF (returned as a download)
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from propdoc.api.schemas import ErrorResponse, GenerateDocumentRequest, TemplateResponse
from propdoc.core.errors import AssetUnavailable, TemplateNotFound, UnsupportedAsset
from propdoc.pipeline.generate import generate_document
from propdoc.templates.registry import default_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["documents"])

PIPELINE_TIMEOUT = 90  # seconds


@router.get("/templates", response_model=list[TemplateResponse])
async def list_templates():
    return [
        TemplateResponse(
            id=t.id,
            name=t.name,
            description=t.description,
            placeholders=[p.key.value for p in t.placeholders],
        )
        for t in default_registry.list()
    ]


@router.post(
    "/documents",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Generated brochure"},
        404: {"model": ErrorResponse, "description": "Unknown template"},
        422: {"model": ErrorResponse, "description": "Template asset could not be parsed"},
        502: {"model": ErrorResponse, "description": "Template asset unavailable"},
        504: {"model": ErrorResponse, "description": "Pipeline timeout"},
    },
)
async def create_document(request: GenerateDocumentRequest):
    """Run the brochure pipeline and return the PDF as an attachment."""
    try:
        document = await asyncio.wait_for(
            generate_document(
                request.template_id,
                request.project.to_domain(),
                paginate=request.paginate,
            ),
            timeout=PIPELINE_TIMEOUT,
        )
    except TemplateNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnsupportedAsset as e:
        raise HTTPException(status_code=422, detail=str(e))
    except AssetUnavailable as e:
        raise HTTPException(status_code=502, detail=str(e))
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail=f"Document generation timed out after {PIPELINE_TIMEOUT}s")
    except Exception as e:
        logger.exception("Document generation failed for template %s", request.template_id)
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.template_id}.pdf"',
            "X-Summary-Source": document.summary.source.value,
            "X-Document-Warnings": str(len(document.warnings)),
        },
    )
