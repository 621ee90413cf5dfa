"""Brochure generation pipeline — template + property data → PDF bytes.

Strictly linear:
  1. Resolve template            (TemplateNotFound — fatal)
  2. Fetch template asset        (AssetUnavailable — fatal)
  3. Extract plain text          (UnsupportedAsset — fatal)
  4. Listing summary             (never fatal; degrades to fallback text)
  5. Merge placeholders
  6. Layout
  7. Render PDF                  (per-line failures and tiny output are warnings)

Once the merge stage is reached the caller always gets a document back.
Network steps are awaited; text extraction and rendering run on worker
threads so concurrent invocations sharing an event loop stay responsive.
"""

import asyncio
import logging
import time

from propdoc.config import settings
from propdoc.core.errors import PipelineWarning, WarningKind
from propdoc.core.types import (
    GeneratedDocument,
    LayoutLine,
    PageSpec,
    PipelineStage,
    ProjectData,
    RenderResult,
)
from propdoc.ingestion.extractor import extract_text
from propdoc.observability.tracing import log_metrics, log_params, set_tag, start_run, trace
from propdoc.pipeline.merge import build_placeholder_map, merge
from propdoc.render.fonts import load_fonts
from propdoc.render.layout import layout_text
from propdoc.render.writer import render_pdf
from propdoc.retrieval.llm import generate_summary
from propdoc.retrieval.loader import fetch_asset
from propdoc.templates.registry import TemplateRegistry, default_registry

logger = logging.getLogger(__name__)

PAGE = PageSpec(width=595, height=842, margin=50)


def _log_stage(stage: PipelineStage, template_id: str, start: float) -> None:
    logger.info(
        "Stage %s", stage.value,
        extra={
            "template_id": template_id,
            "step": stage.value,
            "duration_ms": round((time.monotonic() - start) * 1000, 1),
        },
    )


def _layout_and_render(
    merged: str, title: str, paginate: bool, template_id: str, start: float,
) -> tuple[list[LayoutLine], RenderResult, str]:
    """CPU-bound tail of the pipeline. Fonts are loaded once and shared by both steps."""
    fonts = load_fonts(settings.font_regular_path, settings.font_bold_path)
    lines = layout_text(merged, title, fonts, page=PAGE, paginate=paginate)
    _log_stage(PipelineStage.LAID_OUT, template_id, start)
    result = render_pdf(
        lines, fonts, page=PAGE, title=title,
        suspicious_below=settings.suspicious_output_bytes,
    )
    return lines, result, fonts.fallback_reason


@trace(name="generate_document", span_type="CHAIN")
async def generate_document(
    template_id: str,
    project: ProjectData,
    registry: TemplateRegistry | None = None,
    paginate: bool | None = None,
) -> GeneratedDocument:
    """Run the full template → PDF pipeline for one property.

    Raises:
        TemplateNotFound, AssetUnavailable, UnsupportedAsset: fatal stages
        before the merge. Nothing is rendered when these are raised.
    """
    registry = default_registry if registry is None else registry
    paginate = settings.paginate if paginate is None else paginate
    start = time.monotonic()
    warnings: list[PipelineWarning] = []

    with start_run(run_name=f"document_{template_id}"):
        log_params({"template_id": template_id, "paginate": paginate})

        template = registry.resolve(template_id)
        _log_stage(PipelineStage.TEMPLATE_RESOLVED, template_id, start)

        raw = await fetch_asset(template.asset_location)
        plain_text = await asyncio.to_thread(extract_text, raw)
        _log_stage(PipelineStage.ASSET_LOADED, template_id, start)

        summary = await generate_summary(project.title, project.address)
        if summary.degraded:
            warnings.append(PipelineWarning(
                kind=WarningKind.GENERATION_DEGRADED,
                message="Listing summary generation failed; fallback text used",
                detail=summary.reason,
            ))
        set_tag("summary_source", summary.source.value)
        _log_stage(PipelineStage.SUMMARY_READY, template_id, start)

        placeholders = build_placeholder_map(template, project, summary.text)
        merged = merge(plain_text, placeholders)
        _log_stage(PipelineStage.MERGED, template_id, start)

        lines, rendered, font_problem = await asyncio.to_thread(
            _layout_and_render, merged, project.title, paginate, template.id, start,
        )
        if font_problem:
            warnings.append(PipelineWarning(
                kind=WarningKind.RENDER_WARNING,
                message="Custom font unavailable; Helvetica used",
                detail=font_problem,
            ))
        warnings.extend(rendered.warnings)
        _log_stage(PipelineStage.RENDERED, template_id, start)

        document = GeneratedDocument(
            content=rendered.content,
            summary=summary,
            template_id=template.id,
            line_count=len(lines),
            page_count=rendered.page_count,
            warnings=warnings,
        )

        log_metrics({
            "byte_length": float(document.byte_length),
            "line_count": float(document.line_count),
            "warning_count": float(len(warnings)),
        })
        logger.info(
            "Generated %s document: %d bytes, %d lines, %d warning(s)",
            template.id, document.byte_length, document.line_count, len(warnings),
            extra={
                "template_id": template.id,
                "step": PipelineStage.DONE.value,
                "byte_length": document.byte_length,
                "summary_source": summary.source.value,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return document
