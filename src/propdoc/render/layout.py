"""Text layout — paragraphs → positioned, word-wrapped lines.

Typography is derived from the text itself, not from template styling:

  Title    paragraph contains the project title verbatim   bold 24pt, gap 20
  Heading  shorter than 50 chars and ends with ":"         bold 16pt, gap 16
  Body     everything else                                 regular 12pt, gap 8

Lines are wrapped greedily against the content width (page width minus both
margins). A word wider than the content width on its own is placed alone on
its line, unbroken. The cursor starts at `page.height - page.margin` and
moves down by `font_size + gap` for every emitted line.

By default there is a single page: lines past the bottom margin keep their
(off-page, possibly negative) y positions. With `paginate=True` the cursor
resets to the top of a new page instead.
"""

import logging
import re
from dataclasses import dataclass

from propdoc.core.types import FontRole, LayoutLine, PageSpec
from propdoc.render.fonts import FontSet

logger = logging.getLogger(__name__)

HEADING_MAX_CHARS = 50

# C0 and C1 control ranges
CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F]")


@dataclass(frozen=True)
class RoleStyle:
    font_size: float
    line_gap: float


STYLES: dict[FontRole, RoleStyle] = {
    FontRole.TITLE: RoleStyle(font_size=24, line_gap=20),
    FontRole.HEADING: RoleStyle(font_size=16, line_gap=16),
    FontRole.BODY: RoleStyle(font_size=12, line_gap=8),
}


def split_paragraphs(text: str) -> list[str]:
    """Split on line breaks, dropping empty and whitespace-only paragraphs."""
    return [p for p in text.splitlines() if p.strip()]


def classify(paragraph: str, project_title: str) -> FontRole:
    if project_title and project_title in paragraph:
        return FontRole.TITLE
    if len(paragraph) < HEADING_MAX_CHARS and paragraph.strip().endswith(":"):
        return FontRole.HEADING
    return FontRole.BODY


def clean(paragraph: str) -> str:
    """Replace control characters with spaces (they become word breaks)."""
    return CONTROL_CHARS.sub(" ", paragraph)


def wrap_words(text: str, fonts: FontSet, role: FontRole, size: float, max_width: float) -> list[str]:
    """Greedy word wrap. Never splits a word; never returns an empty line."""
    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if not word.strip():
            continue
        candidate = f"{current} {word}" if current else word
        if current and fonts.width(candidate, role, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def layout_text(
    merged_text: str,
    project_title: str,
    fonts: FontSet,
    page: PageSpec = PageSpec(),
    paginate: bool = False,
) -> list[LayoutLine]:
    """Lay merged text out as positioned lines in reading order."""
    max_width = page.content_width
    top = page.height - page.margin
    y = top
    page_index = 0
    lines: list[LayoutLine] = []

    for paragraph in split_paragraphs(merged_text):
        role = classify(paragraph, project_title)
        style = STYLES[role]
        for text in wrap_words(clean(paragraph), fonts, role, style.font_size, max_width):
            if paginate and y < page.margin:
                page_index += 1
                y = top
            lines.append(LayoutLine(
                text=text,
                role=role,
                font_size=style.font_size,
                x=page.margin,
                y=y,
                page=page_index,
            ))
            y -= style.font_size + style.line_gap

    overflow = sum(1 for line in lines if line.y < page.margin)
    if overflow:
        logger.warning("%d of %d lines fall below the bottom margin", overflow, len(lines))
    logger.debug("Laid out %d lines across %d page(s)", len(lines), page_index + 1)
    return lines
