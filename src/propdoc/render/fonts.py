"""Per-invocation font set.

Fonts are value objects owned by one render: the layout engine measures
with them and the page writer draws with the same instances. Nothing is
cached at module level.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from propdoc.core.types import FontRole

logger = logging.getLogger(__name__)

DEFAULT_REGULAR = "Helvetica"
DEFAULT_BOLD = "Helvetica-Bold"


@dataclass(frozen=True)
class FontSet:
    """Regular + bold faces with their metrics loaded."""

    regular: object
    bold: object
    fallback_reason: str = ""

    def font_for(self, role: FontRole):
        return self.regular if role is FontRole.BODY else self.bold

    def name_for(self, role: FontRole) -> str:
        return self.font_for(role).fontName

    def width(self, text: str, role: FontRole, size: float) -> float:
        """Advance width of `text` in points at `size`."""
        return self.font_for(role).stringWidth(text, size)


def _load_ttf(path: str, name: str):
    font = TTFont(name, path)
    pdfmetrics.registerFont(font)
    return pdfmetrics.getFont(name)


def load_fonts(regular_path: str = "", bold_path: str = "") -> FontSet:
    """Load the regular/bold pair once for a single document.

    Empty paths use the standard Helvetica pair. A TrueType file that can't
    be read falls back to Helvetica for that face and records why.
    """
    regular = pdfmetrics.getFont(DEFAULT_REGULAR)
    bold = pdfmetrics.getFont(DEFAULT_BOLD)
    problems: list[str] = []

    if regular_path:
        try:
            regular = _load_ttf(regular_path, f"propdoc-regular-{Path(regular_path).stem}")
        except (OSError, TTFError) as e:
            logger.warning("Regular font %s unusable, using %s: %s", regular_path, DEFAULT_REGULAR, e)
            problems.append(f"regular font {regular_path}: {e}")
    if bold_path:
        try:
            bold = _load_ttf(bold_path, f"propdoc-bold-{Path(bold_path).stem}")
        except (OSError, TTFError) as e:
            logger.warning("Bold font %s unusable, using %s: %s", bold_path, DEFAULT_BOLD, e)
            problems.append(f"bold font {bold_path}: {e}")

    return FontSet(regular=regular, bold=bold, fallback_reason="; ".join(problems))
