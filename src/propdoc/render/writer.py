"""Page writer — positioned lines → PDF bytes via a reportlab canvas.

Drawing is best effort per line: a line that fails to draw is skipped and
reported as a RenderWarning, never aborting the document. The canvas runs
in reportlab's invariant mode (no timestamps or random document IDs), so the
same lines always serialize to the same bytes.
"""

import io
import logging

from reportlab.pdfgen import canvas

from propdoc.core.errors import PipelineWarning, WarningKind
from propdoc.core.types import LayoutLine, PageSpec, RenderResult
from propdoc.render.fonts import FontSet

logger = logging.getLogger(__name__)

SUSPICIOUS_OUTPUT_BYTES = 100


def draw_line(pdf: canvas.Canvas, fonts: FontSet, line: LayoutLine) -> PipelineWarning | None:
    """Draw one line; return a warning instead of raising if it can't be drawn."""
    try:
        pdf.setFont(fonts.name_for(line.role), line.font_size)
        pdf.drawString(line.x, line.y, line.text)
    except Exception as e:
        logger.warning("Could not draw line %r: %s", line.text[:60], e)
        return PipelineWarning(
            kind=WarningKind.RENDER_WARNING,
            message=f"Skipped line: {line.text[:60]!r}",
            detail=f"{type(e).__name__}: {e}",
        )
    return None


def render_pdf(
    lines: list[LayoutLine],
    fonts: FontSet,
    page: PageSpec = PageSpec(),
    title: str = "",
    suspicious_below: int = SUSPICIOUS_OUTPUT_BYTES,
) -> RenderResult:
    """Encode laid-out lines as a PDF document.

    Lines on page N > 0 (only produced when layout paginates) start a new
    page; the FontSet is reused, never reloaded.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(page.width, page.height), invariant=1)
    if title:
        pdf.setTitle(title)
    pdf.setFillColorRGB(0, 0, 0)

    warnings: list[PipelineWarning] = []
    drawn = 0
    current_page = 0
    for line in lines:
        while line.page > current_page:
            pdf.showPage()
            pdf.setFillColorRGB(0, 0, 0)
            current_page += 1
        warning = draw_line(pdf, fonts, line)
        if warning is None:
            drawn += 1
        else:
            warnings.append(warning)

    pdf.showPage()
    pdf.save()
    content = buffer.getvalue()

    if len(content) < suspicious_below:
        logger.warning("PDF is suspiciously small (%d bytes), might be invalid", len(content),
                       extra={"byte_length": len(content)})
        warnings.append(PipelineWarning(
            kind=WarningKind.SUSPICIOUS_OUTPUT,
            message=f"Output is only {len(content)} bytes",
        ))

    logger.info("PDF generation complete: %d bytes, %d/%d lines drawn",
                len(content), drawn, len(lines), extra={"byte_length": len(content)})
    return RenderResult(
        content=content,
        lines_drawn=drawn,
        page_count=current_page + 1,
        warnings=tuple(warnings),
    )
