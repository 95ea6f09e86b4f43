"""
Page widget: rasterized page image with the annotation overlay on top.
"""

import logging
from typing import List, Optional

from PyQt5.QtCore import QLineF, Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPainter, QPen, QPixmap
from PyQt5.QtWidgets import QLabel, QWidget

from quillview.config import DEFAULT_CONFIG, ViewerConfig
from quillview.core.annotations.models import Decoration, OverlayLayerModel, PopupStyle
from quillview.core.geometry import Viewport
from quillview.core.interaction import FocusManager
from quillview.styles import ThemeManager

from .annotation_popup import AnnotationPopup

logger = logging.getLogger(__name__)


class AnnotationOverlay(QWidget):
    """
    Transparent layer holding a page's popups and strike lines.

    The overlay covers exactly the page image so popup anchors, which are
    in viewport pixels, can be used as widget coordinates directly.
    """

    # Signals
    popup_focused = pyqtSignal(object)  # AnnotationPopup

    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)

        self.config = config
        self.dark_mode = False
        self.popups: List[AnnotationPopup] = []
        self.decorations: List[Decoration] = []
        self.focus_manager = FocusManager(config.popup_base_z, config.popup_raised_z)

        self.setObjectName("AnnotationOverlay")
        self.setAttribute(Qt.WA_TranslucentBackground)

        self.counter = QLabel(self)
        self.counter.setObjectName("AnnotationCounter")
        self.counter.hide()

    @property
    def count(self) -> int:
        return len(self.popups)

    def set_layer(self, layer: OverlayLayerModel):
        """
        Replace the overlay contents.

        Args:
            layer: Popups and decorations for this page
        """
        self.clear()

        for model in layer.popups:
            popup = AnnotationPopup(model, self.config, parent=self)
            popup.clicked.connect(self.focus_popup)
            popup.show()
            self.focus_manager.register(popup)
            self.popups.append(popup)

        self.decorations = list(layer.decorations)

        if layer.count > 0:
            self.counter.setText(f"Annotations: {layer.count}")
            self.counter.adjustSize()
            self._place_counter()
            self.counter.show()
            self.counter.raise_()

        if layer.skipped:
            logger.debug("%d annotation(s) skipped on overlay", layer.skipped)

        self.update()

    def clear(self):
        """Remove every popup and decoration."""
        for popup in self.popups:
            try:
                popup.clicked.disconnect(self.focus_popup)
            except (TypeError, RuntimeError):
                pass
            popup.hide()
            popup.setParent(None)
            popup.deleteLater()

        self.popups = []
        self.decorations = []
        self.focus_manager.clear()
        self.counter.hide()
        self.update()

    def focus_popup(self, popup: AnnotationPopup):
        """Raise a popup above its siblings."""
        self.focus_manager.focus(popup)
        popup.raise_()
        # The badge stays on top of everything
        self.counter.raise_()
        self.popup_focused.emit(popup)

    def focused_popup(self) -> Optional[AnnotationPopup]:
        return self.focus_manager.raised

    def set_dark_mode(self, dark_mode: bool):
        self.dark_mode = dark_mode
        self.update()

    def resizeEvent(self, event):
        self._place_counter()
        super().resizeEvent(event)

    def _place_counter(self):
        margin = 10
        self.counter.move(self.width() - self.counter.width() - margin, margin)

    def paintEvent(self, event):
        if not self.decorations:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        color = ThemeManager.get_annotation_color(PopupStyle.PRIMARY, self.dark_mode)
        pen = QPen(color, self.config.strike_line_width)
        painter.setPen(pen)

        for deco in self.decorations:
            painter.drawLine(QLineF(deco.x, deco.y, deco.x + deco.width, deco.y))

        painter.end()


class PageWidget(QWidget):
    """
    One page of the document.

    Starts out as a blank placeholder of the right size and receives its
    image once the page has been rasterized.
    """

    def __init__(
        self,
        page_index: int,
        viewport: Viewport,
        config: ViewerConfig = DEFAULT_CONFIG,
        parent=None,
    ):
        super().__init__(parent)

        self.page_index = page_index
        self.viewport = viewport
        self.rendered = False
        self.failed = False

        self.setObjectName("PageWidget")
        self.setAttribute(Qt.WA_StyledBackground)

        width, height = int(round(viewport.width)), int(round(viewport.height))
        self.setFixedSize(width, height)

        self.canvas = QLabel(self)
        self.canvas.setGeometry(0, 0, width, height)
        self.canvas.setAlignment(Qt.AlignCenter)

        self.overlay = AnnotationOverlay(config, parent=self)
        self.overlay.setGeometry(0, 0, width, height)

    @property
    def page_num(self) -> int:
        return self.page_index + 1

    def set_image(self, image: QImage):
        """Show the rasterized page."""
        self.canvas.setPixmap(QPixmap.fromImage(image))
        self.rendered = True
        self.failed = False

    def show_error(self, message: str):
        """Leave a placeholder for a page that failed to render."""
        self.canvas.clear()
        self.canvas.setText(f"Page {self.page_num} could not be rendered")
        self.canvas.setToolTip(message)
        self.failed = True

    def release(self):
        """Tear down the page and its overlay."""
        self.overlay.clear()
        self.canvas.clear()
        self.hide()
        self.setParent(None)
        self.deleteLater()
