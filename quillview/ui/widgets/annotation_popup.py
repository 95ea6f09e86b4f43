"""
Draggable, selectable popup showing one annotation group.
"""

from PyQt5.QtCore import QPoint, Qt, pyqtSignal
from PyQt5.QtGui import QMouseEvent
from PyQt5.QtWidgets import QLabel

from quillview.config import DEFAULT_CONFIG, ViewerConfig
from quillview.core.annotations.models import OverlayPopup
from quillview.core.interaction import PointerOutcome, PopupInteraction

SELECTABLE = Qt.TextSelectableByMouse | Qt.TextSelectableByKeyboard


class AnnotationPopup(QLabel):
    """
    Popup label for an annotation group.

    Features:
    - Drag to reposition (after a small movement threshold)
    - Click to focus, raise above siblings and enable text selection
    - Existing text selections are left to the label
    """

    # Signals
    clicked = pyqtSignal(object)  # AnnotationPopup

    def __init__(self, model: OverlayPopup, config: ViewerConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)

        self.model = model
        self.config = config
        self.interaction = PopupInteraction(config.drag_threshold)

        self.setObjectName("AnnotationPopup")
        self.setProperty("popupStyle", model.style.value)
        self.setText(model.text)
        self.setTextFormat(Qt.PlainText)
        self.setWordWrap(True)
        self.setMaximumWidth(config.popup_max_width)
        self.setToolTip(model.group.main.author or "")
        self.setFocusPolicy(Qt.NoFocus)
        self.setTextInteractionFlags(Qt.NoTextInteraction)
        self.setCursor(Qt.OpenHandCursor)

        self.adjustSize()
        self.place_at_anchor()

    def place_at_anchor(self):
        """Position the popup so it grows upward from its anchor."""
        x, y = self.model.anchor
        top = y - self.config.popup_anchor_gap - self.height()
        self.move(int(x), int(top))

    @property
    def annotation_id(self) -> str:
        return self.model.annotation_id

    def select_all_text(self):
        """Select the popup's full text."""
        self.setTextInteractionFlags(SELECTABLE)
        self.setSelection(0, len(self.text()))

    # Mouse event handlers

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)

        has_selection = self.hasSelectedText()
        self.interaction.pointer_down(
            self._parent_pos(event), (self.x(), self.y()), has_selection
        )

        if has_selection:
            # Let the label adjust or clear its own selection
            super().mousePressEvent(event)
            return

        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if not (event.buttons() & Qt.LeftButton):
            return super().mouseMoveEvent(event)

        was_dragging = self.interaction.is_dragging
        new_pos = self.interaction.pointer_move(self._parent_pos(event))

        if new_pos is None:
            super().mouseMoveEvent(event)
            return

        if not was_dragging:
            # Dragging and selecting are exclusive
            self.setTextInteractionFlags(Qt.NoTextInteraction)
            self.setCursor(Qt.ClosedHandCursor)

        self.move(int(new_pos[0]), int(new_pos[1]))
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)

        outcome = self.interaction.pointer_up(self._parent_pos(event))

        if outcome == PointerOutcome.CLICK:
            self.setTextInteractionFlags(SELECTABLE)
            self.setFocus(Qt.MouseFocusReason)
            self.clicked.emit(self)
        elif outcome == PointerOutcome.DROP:
            self.setCursor(Qt.OpenHandCursor)
        else:
            super().mouseReleaseEvent(event)
            return

        event.accept()

    def keyPressEvent(self, event):
        # Shortcuts are resolved by the window's input handler
        event.ignore()

    def focusOutEvent(self, event):
        self.interaction.blur()
        super().focusOutEvent(event)

    def _parent_pos(self, event: QMouseEvent):
        pos: QPoint = self.mapToParent(event.pos())
        return float(pos.x()), float(pos.y())
