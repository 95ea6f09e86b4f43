"""
Integration tests for the page render pipeline.

Run with: python -m pytest tests/test_pdf_viewer.py -v
"""

import time

import pytest
from PyQt5.QtWidgets import QScrollArea, QWidget

from quillview.core.document import PDFDocumentReader
from quillview.ui.widgets import PDFViewer


def _wait_for(qapp, condition, timeout=10.0):
    deadline = time.monotonic() + timeout
    while not condition() and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    return condition()


@pytest.fixture
def viewer(qapp, pdf_bytes):
    reader = PDFDocumentReader()
    reader.load_bytes(pdf_bytes, "sample.pdf")

    area = QScrollArea()
    container = QWidget()
    area.setWidget(container)
    area.setWidgetResizable(True)
    area.resize(600, 800)

    pdf_viewer = PDFViewer(container, area, reader)
    yield pdf_viewer

    pdf_viewer.close()
    reader.close_document()
    area.deleteLater()


class TestRenderPass:
    """Tests for a complete render pass."""

    def test_renders_every_page_with_overlay(self, qapp, viewer):
        finished = []
        viewer.render_finished.connect(finished.append)

        generation = viewer.render_all(1.0)

        assert _wait_for(qapp, lambda: finished)
        assert finished == [generation]
        assert [p.rendered for p in viewer.pages] == [True, True]
        assert viewer.pages[0].overlay.count == 2
        assert viewer.pages[1].overlay.count == 0
        assert not viewer.is_rendering()

    def test_layout_before_rendering(self, qapp, viewer):
        viewer.render_all(2.0)

        spans = viewer.page_spans()
        assert spans[0] == (20, 620)
        assert spans[1] == (640, 1240)
        assert viewer.page_top(2) == 640
        assert viewer.page_top(3) is None

        _wait_for(qapp, lambda: not viewer.is_rendering())

    def test_new_pass_discards_old_results(self, qapp, viewer):
        finished = []
        viewer.render_finished.connect(finished.append)

        viewer.render_all(1.0)
        second = viewer.render_all(1.5)

        assert _wait_for(qapp, lambda: finished)
        # Let any late results of the first pass arrive
        for _ in range(20):
            qapp.processEvents()
            time.sleep(0.01)

        assert finished == [second]
        assert all(p.viewport.scale == 1.5 for p in viewer.pages)
        assert len(viewer.pages) == 2

    def test_focused_popup_reports_its_page(self, qapp, viewer):
        pages = []
        viewer.popup_focused.connect(pages.append)
        viewer.render_all(1.0)
        assert _wait_for(qapp, lambda: not viewer.is_rendering())

        overlay = viewer.pages[0].overlay
        overlay.focus_popup(overlay.popups[0])

        assert pages == [1]

    def test_thumbnails(self, qapp, viewer):
        viewer.render_all(1.0)
        _wait_for(qapp, lambda: not viewer.is_rendering())

        images = viewer.render_thumbnails()

        assert len(images) == 2
        assert images[0].width() == 40

    def test_close_clears_pages(self, qapp, viewer):
        viewer.render_all(1.0)

        viewer.close()

        assert viewer.pages == []
        assert not viewer.is_rendering()
