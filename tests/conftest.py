"""
Shared fixtures: an offscreen QApplication and in-memory PDF documents.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # noqa: E402
import pytest  # noqa: E402
from PyQt5.QtWidgets import QApplication  # noqa: E402

from quillview.core.annotations.models import RawAnnotation  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole test session."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def pdf_bytes():
    """Two-page PDF (200 x 300 points) with a comment and a strike-out on page 1."""
    doc = fitz.open()
    page = doc.new_page(width=200, height=300)
    page.insert_text((20, 60), "Quillview test page", fontsize=11)
    comment = page.add_text_annot((50, 100), "hello")
    comment.set_info(title="Reviewer")
    comment.update()
    doc.xref_set_key(comment.xref, "M", "(D:20240101120000)")
    strike = page.add_strikeout_annot(fitz.Rect(20, 48, 120, 64))
    strike.set_info(content="remove this")
    strike.update()
    doc.xref_set_key(strike.xref, "M", "(D:20240101120500)")
    doc.new_page(width=200, height=300)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def annotation_factory():
    """Builds RawAnnotation records with sensible defaults."""
    return make_annotation


def make_annotation(
    id="1R",
    subtype="Text",
    content="note",
    modified=None,
    rect=(10.0, 20.0, 30.0, 40.0),
    quad_points=(),
    reply_to=None,
):
    return RawAnnotation(
        id=id,
        subtype=subtype,
        content=content,
        reply_to=reply_to,
        modified=modified,
        rect=rect,
        quad_points=quad_points,
    )
