"""
Tests for document loading and annotation extraction with in-memory PDFs.

Run with: python -m pytest tests/test_document.py -v
"""

import fitz
import pytest

from quillview.core.annotations import OverlayRenderer
from quillview.core.document import PDFDocumentReader, read_file, read_page_annotations
from quillview.core.document.annotation_reader import (
    parse_numbers,
    parse_reference,
    strip_rich_text,
)
from quillview.core.errors import LoadError, PageRenderError


class TestParsing:
    """Tests for the PDF value parsers."""

    def test_parse_numbers(self):
        assert parse_numbers("[10 20.5 -3 .5]") == [10.0, 20.5, -3.0, 0.5]

    def test_parse_numbers_empty(self):
        assert parse_numbers("") == []

    def test_parse_reference(self):
        assert parse_reference("12 0 R") == "12R"
        assert parse_reference("null") is None

    def test_strip_rich_text(self):
        value = '<body><p>First <b>bold</b></p><p>line</p></body>'

        assert strip_rich_text(value) == "First bold line"


class TestPDFDocumentReader:
    """Tests for loading documents."""

    def test_load_bytes(self, pdf_bytes):
        reader = PDFDocumentReader()

        assert reader.load_bytes(pdf_bytes, "sample.pdf") == 2
        assert reader.is_loaded()
        assert reader.file_name == "sample.pdf"
        assert reader.get_page_size(0) == (200, 300)
        reader.close_document()

    def test_empty_data_raises(self):
        with pytest.raises(LoadError):
            PDFDocumentReader().load_bytes(b"", "empty.pdf")

    def test_garbage_raises(self):
        with pytest.raises(LoadError):
            PDFDocumentReader().load_bytes(b"not a pdf at all", "garbage.pdf")

    def test_failed_load_keeps_previous_document(self, pdf_bytes):
        reader = PDFDocumentReader()
        reader.load_bytes(pdf_bytes, "sample.pdf")

        with pytest.raises(LoadError):
            reader.load_bytes(b"junk", "junk.pdf")

        assert reader.file_name == "sample.pdf"
        assert reader.get_page_count() == 2
        reader.close_document()

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as excinfo:
            read_file(str(tmp_path / "missing.pdf"))

        assert excinfo.value.source.endswith("missing.pdf")

    def test_load_pdf_from_disk(self, pdf_bytes, tmp_path):
        path = tmp_path / "doc.pdf"
        path.write_bytes(pdf_bytes)
        reader = PDFDocumentReader()

        assert reader.load_pdf(str(path)) == 2
        assert reader.file_name == "doc.pdf"
        reader.close_document()

    def test_missing_page_raises(self, pdf_bytes):
        reader = PDFDocumentReader()
        reader.load_bytes(pdf_bytes)

        with pytest.raises(PageRenderError):
            reader.get_page(5)
        assert reader.get_page_size(5) == (0.0, 0.0)
        reader.close_document()

    def test_render_page_image(self, pdf_bytes):
        reader = PDFDocumentReader()
        reader.load_bytes(pdf_bytes)

        image = reader.render_page_image(0, 0.5)

        assert not image.isNull()
        assert image.width() == 100
        assert image.height() == 150
        reader.close_document()


class TestAnnotationExtraction:
    """Tests for reading annotations out of a page."""

    def test_reads_comment_and_strike(self, pdf_bytes):
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")

        annotations = read_page_annotations(doc, doc[0])
        by_subtype = {a.subtype: a for a in annotations}

        assert "Text" in by_subtype
        assert "StrikeOut" in by_subtype

        comment = by_subtype["Text"]
        assert comment.content == "hello"
        assert comment.author == "Reviewer"
        assert comment.modified == "D:20240101120000"
        assert comment.id.endswith("R")
        assert comment.rect is not None

        strike = by_subtype["StrikeOut"]
        assert strike.content == "remove this"
        assert len(strike.quad_points) == 1
        doc.close()

    def test_links_are_ignored(self):
        doc = fitz.open()
        page = doc.new_page()
        page.insert_link({"kind": fitz.LINK_URI, "from": fitz.Rect(10, 10, 50, 30), "uri": "https://example.com"})
        data = doc.tobytes()
        doc.close()

        doc = fitz.open(stream=data, filetype="pdf")
        assert read_page_annotations(doc, doc[0]) == []
        doc.close()

    def test_comment_anchor_matches_icon_corner(self, pdf_bytes):
        reader = PDFDocumentReader()
        reader.load_bytes(pdf_bytes)
        icon = next(a.rect for a in reader.doc[0].annots() if a.type[1] == "Text")

        layer = OverlayRenderer().render_page(reader.get_annotations(0), reader.get_viewport(0, 1.0))
        popup = next(p for p in layer.popups if p.subtype == "Text")

        # Lower-left of the icon, in top-left-origin pixels
        assert popup.anchor[0] == pytest.approx(icon.x0)
        assert popup.anchor[1] == pytest.approx(icon.y1)
        assert layer.count == 2
        assert len(layer.decorations) == 1
        reader.close_document()
