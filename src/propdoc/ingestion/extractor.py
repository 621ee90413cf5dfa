"""Rich-text template → plain text.

Styling is deliberately discarded: the renderer re-derives typography from
the text itself. Paragraph boundaries are kept as newlines because the
layout engine classifies paragraphs line by line.

Two payload kinds are understood:
  - Office Open XML (.docx) — parsed with python-docx
  - HTML — parsed with BeautifulSoup
"""

import io
import logging
import zipfile

from bs4 import BeautifulSoup, NavigableString
from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from propdoc.core.errors import UnsupportedAsset

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"

# Elements that start a new paragraph in the plain-text rendition
BLOCK_TAGS = (
    "p", "div", "section", "article", "header", "footer", "blockquote",
    "h1", "h2", "h3", "h4", "h5", "h6", "li", "tr", "table", "pre",
)
DROP_TAGS = ("head", "script", "style", "title", "noscript")


def extract_text(raw: bytes) -> str:
    """Convert a template payload into newline-separated paragraphs.

    Raises:
        UnsupportedAsset: if the payload cannot be parsed at all.
    """
    if not raw:
        raise UnsupportedAsset("Template asset is empty")

    if raw.startswith(ZIP_MAGIC):
        text = docx_to_text(raw)
        kind = "docx"
    else:
        try:
            markup = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise UnsupportedAsset(f"Template asset is neither DOCX nor UTF-8 text: {e}") from e
        text = html_to_text(markup)
        kind = "html"

    logger.debug("Extracted %d chars of text from %s asset", len(text), kind)
    return text


def docx_to_text(raw: bytes) -> str:
    """Body paragraphs and table rows of a .docx, in document order."""
    try:
        doc = Document(io.BytesIO(raw))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as e:
        # SyntaxError covers lxml's XMLSyntaxError for corrupt document parts
        raise UnsupportedAsset(f"Could not open DOCX template: {type(e).__name__}: {e}") from e

    paragraphs: list[str] = []
    for child in doc.element.body.iterchildren():
        if child.tag == qn("w:p"):
            paragraphs.append(Paragraph(child, doc).text)
        elif child.tag == qn("w:tbl"):
            for row in Table(child, doc).rows:
                cells = [cell.text.strip() for cell in row.cells]
                paragraphs.append(" | ".join(c for c in cells if c))
    return "\n".join(paragraphs)


def html_to_text(markup: str) -> str:
    """Text content of an HTML document with block elements on their own lines."""
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(DROP_TAGS):
        if not tag.decomposed:
            tag.decompose()
    # Source newlines are plain whitespace in HTML; only markup breaks lines
    for node in list(soup.find_all(string=True)):
        if type(node) is NavigableString and "\n" in node:
            node.replace_with(node.replace("\n", " "))
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")

    lines = (" ".join(line.split()) for line in soup.get_text().splitlines())
    return "\n".join(line for line in lines if line)
