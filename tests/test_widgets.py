"""
Tests for the annotation popup and overlay widgets.

Mouse handlers are called with synthetic events on the offscreen platform.

Run with: python -m pytest tests/test_widgets.py -v
"""

import pytest
from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QImage, QMouseEvent

from quillview.core.annotations import OverlayRenderer
from quillview.core.annotations.models import (
    AnnotationGroup,
    Decoration,
    OverlayLayerModel,
    OverlayPopup,
    PopupStyle,
)
from quillview.core.geometry import Viewport
from quillview.ui.widgets import AnnotationOverlay, AnnotationPopup, CopyNotice, PageWidget


def _mouse(kind, x, y, buttons=Qt.LeftButton):
    button = Qt.LeftButton if kind != QEvent.MouseMove else Qt.NoButton
    return QMouseEvent(kind, QPointF(x, y), button, buttons, Qt.NoModifier)


def _popup_model(annotation_factory, text="note", anchor=(50.0, 200.0), style=PopupStyle.PRIMARY, id="1R"):
    group = AnnotationGroup(key=f"M:{id}", main=annotation_factory(id=id, content=text))
    return OverlayPopup(group=group, text=text, anchor=anchor, style=style)


@pytest.fixture
def overlay(qapp):
    widget = AnnotationOverlay()
    widget.resize(400, 600)
    yield widget
    widget.clear()
    widget.deleteLater()


class TestAnnotationPopup:
    """Tests for popup placement and pointer handling."""

    def test_grows_upward_from_anchor(self, qapp, annotation_factory):
        popup = AnnotationPopup(_popup_model(annotation_factory))

        assert popup.x() == 50
        assert popup.y() + popup.height() == 200 - 10
        assert popup.maximumWidth() == 200
        assert popup.objectName() == "AnnotationPopup"
        assert popup.property("popupStyle") == "primary"

    def test_click_focuses(self, overlay, annotation_factory):
        overlay.set_layer(OverlayLayerModel(popups=[_popup_model(annotation_factory)]))
        popup = overlay.popups[0]
        clicked = []
        popup.clicked.connect(clicked.append)
        start = popup.pos()

        popup.mousePressEvent(_mouse(QEvent.MouseButtonPress, 5, 5))
        popup.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 7, 6, Qt.NoButton))

        assert clicked == [popup]
        assert popup.pos() == start
        assert popup.interaction.focused
        assert popup.textInteractionFlags() & Qt.TextSelectableByMouse

    def test_drag_moves_without_focus(self, overlay, annotation_factory):
        overlay.set_layer(OverlayLayerModel(popups=[_popup_model(annotation_factory)]))
        popup = overlay.popups[0]
        clicked = []
        popup.clicked.connect(clicked.append)
        start = popup.pos()

        popup.mousePressEvent(_mouse(QEvent.MouseButtonPress, 5, 5))
        popup.mouseMoveEvent(_mouse(QEvent.MouseMove, 35, 5))
        popup.mouseReleaseEvent(_mouse(QEvent.MouseButtonRelease, 35, 5, Qt.NoButton))

        assert popup.x() == start.x() + 30
        assert popup.y() == start.y()
        assert clicked == []
        assert popup.cursor().shape() == Qt.OpenHandCursor
        assert overlay.focus_manager.raised is None

    def test_select_all_text(self, qapp, annotation_factory):
        popup = AnnotationPopup(_popup_model(annotation_factory, text="select me"))

        popup.select_all_text()

        assert popup.selectedText() == "select me"


class TestAnnotationOverlay:
    """Tests for the per-page overlay."""

    def test_counter_shows_group_count(self, overlay, annotation_factory):
        layer = OverlayLayerModel(
            popups=[
                _popup_model(annotation_factory, id="1R"),
                _popup_model(annotation_factory, id="2R", anchor=(100.0, 300.0)),
            ]
        )

        overlay.set_layer(layer)

        assert overlay.count == 2
        assert overlay.counter.text() == "Annotations: 2"
        assert not overlay.counter.isHidden()

    def test_empty_layer_hides_counter(self, overlay):
        overlay.set_layer(OverlayLayerModel())

        assert overlay.count == 0
        assert overlay.counter.isHidden()

    def test_strike_lines_alone_hide_counter(self, overlay):
        overlay.set_layer(OverlayLayerModel(decorations=[Decoration(10, 20, 30)]))

        assert len(overlay.decorations) == 1
        assert overlay.counter.isHidden()

    def test_click_raises_and_demotes_others(self, overlay, annotation_factory):
        overlay.set_layer(
            OverlayLayerModel(
                popups=[
                    _popup_model(annotation_factory, id="1R"),
                    _popup_model(annotation_factory, id="2R"),
                ]
            )
        )
        first, second = overlay.popups

        overlay.focus_popup(first)
        overlay.focus_popup(second)

        assert overlay.focused_popup() is second
        assert overlay.focus_manager.z_order(second) > overlay.focus_manager.z_order(first)

    def test_clear_removes_everything(self, overlay, annotation_factory):
        overlay.set_layer(
            OverlayLayerModel(
                popups=[_popup_model(annotation_factory)],
                decorations=[Decoration(10, 20, 30)],
            )
        )

        overlay.clear()

        assert overlay.popups == []
        assert overlay.decorations == []
        assert overlay.focused_popup() is None


class TestPageWidget:
    """Tests for the page container widget."""

    def test_placeholder_has_viewport_size(self, qapp):
        page = PageWidget(0, Viewport.from_size(200, 300, 1.5))

        assert page.width() == 300
        assert page.height() == 450
        assert page.overlay.size() == page.size()
        assert not page.rendered

    def test_set_image(self, qapp):
        page = PageWidget(0, Viewport.from_size(100, 100, 1.0))

        page.set_image(QImage(100, 100, QImage.Format_RGB888))

        assert page.rendered
        assert page.canvas.pixmap() is not None

    def test_error_placeholder(self, qapp):
        page = PageWidget(2, Viewport.from_size(100, 100, 1.0))

        page.show_error("Page 3: broken")

        assert page.failed
        assert "Page 3" in page.canvas.text()

    def test_overlay_from_renderer(self, qapp, annotation_factory):
        viewport = Viewport.from_size(200, 300, 1.0)
        page = PageWidget(0, viewport)
        annotations = [
            annotation_factory(id="1R", content="hello", modified="D1"),
            annotation_factory(id="2R", subtype="Popup", content="ignored", modified="D1"),
        ]

        page.overlay.set_layer(OverlayRenderer().render_page(annotations, viewport))

        assert page.overlay.count == 1
        assert page.overlay.popups[0].text() == "hello"


class TestCopyNotice:
    """Tests for the copy toast."""

    def test_show_message(self, qapp):
        from PyQt5.QtWidgets import QWidget

        parent = QWidget()
        parent.resize(400, 300)
        notice = CopyNotice(parent, duration_ms=1500)

        notice.show_message("Copied to clipboard")

        assert notice.text() == "Copied to clipboard"
        assert notice._timer.isActive()
        assert notice._timer.interval() == 1500
