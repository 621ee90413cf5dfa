"""Tests for template text extraction (DOCX and HTML)."""

import io
import zipfile

import pytest
from docx import Document

from propdoc.core.errors import UnsupportedAsset
from propdoc.ingestion.extractor import docx_to_text, extract_text, html_to_text


def _docx_bytes(*paragraphs: str, table: list[list[str]] | None = None) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table:
        grid = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestDocx:
    def test_paragraphs_in_order(self):
        raw = _docx_bytes("{title}", "About this property:", "{summary}")
        text = extract_text(raw)
        assert text.splitlines() == ["{title}", "About this property:", "{summary}"]

    def test_table_rows_joined(self):
        raw = _docx_bytes("Contact:", table=[["Email", "{email}"], ["Phone", "{phone}"]])
        lines = docx_to_text(raw).splitlines()
        assert "Email | {email}" in lines
        assert "Phone | {phone}" in lines
        assert lines.index("Contact:") < lines.index("Email | {email}")

    def test_zip_that_is_not_docx(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("readme.txt", "hello")
        with pytest.raises(UnsupportedAsset):
            extract_text(buffer.getvalue())

    def test_truncated_docx(self):
        raw = _docx_bytes("{title}")
        with pytest.raises(UnsupportedAsset):
            extract_text(raw[:200])


class TestHtml:
    def test_block_elements_become_paragraphs(self):
        markup = "<html><body><h1>{title}</h1><p>{address}</p><h2>About:</h2><p>{summary}</p></body></html>"
        assert html_to_text(markup).splitlines() == ["{title}", "{address}", "About:", "{summary}"]

    def test_br_breaks_line(self):
        assert html_to_text("<p>Website: {website}<br>Email: {email}</p>").splitlines() == [
            "Website: {website}",
            "Email: {email}",
        ]

    def test_source_newlines_are_whitespace(self):
        markup = "<p>A long\n   sentence split\nacross lines</p>"
        assert html_to_text(markup) == "A long sentence split across lines"

    def test_head_script_style_dropped(self):
        markup = (
            "<html><head><title>Brochure</title><style>h1 {color: red}</style></head>"
            "<body><script>var x = 1;</script><p>{title}</p></body></html>"
        )
        assert html_to_text(markup) == "{title}"

    def test_inline_tags_keep_text_together(self):
        assert html_to_text("<p>Price: <strong>{price}</strong></p>") == "Price: {price}"

    def test_list_items(self):
        markup = "<ul><li>Phone: {phone}</li><li>Broker: {broker_name}</li></ul>"
        assert html_to_text(markup).splitlines() == ["Phone: {phone}", "Broker: {broker_name}"]


class TestExtractText:
    def test_html_bytes(self):
        assert extract_text(b"<p>{title}</p>") == "{title}"

    def test_utf8_bom_stripped(self):
        assert extract_text("\ufeff<p>Café</p>".encode("utf-8")) == "Café"

    def test_bare_text_newlines_collapse(self):
        assert extract_text(b"{title}\n\nAbout:") == "{title} About:"

    def test_empty_payload(self):
        with pytest.raises(UnsupportedAsset):
            extract_text(b"")

    def test_undecodable_bytes(self):
        with pytest.raises(UnsupportedAsset) as exc_info:
            extract_text(b"\xff\xfe\x00\x81garbage")
        assert exc_info.value.stage == "extract_text"
