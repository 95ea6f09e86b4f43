"""
Transient notice shown after copying text.
"""

from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtWidgets import QLabel, QWidget

from quillview.config import DEFAULT_CONFIG


class CopyNotice(QLabel):
    """Small toast centered near the bottom of its parent."""

    def __init__(self, parent: QWidget, duration_ms: int = DEFAULT_CONFIG.copy_notice_ms):
        super().__init__(parent)

        self.duration_ms = duration_ms

        self.setObjectName("CopyNotice")
        self.setAlignment(Qt.AlignCenter)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.hide()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)

    def show_message(self, text: str = "Copied to clipboard"):
        """Show `text`, restarting the timer if already visible."""
        self.setText(text)
        self.adjustSize()

        parent = self.parentWidget()
        x = (parent.width() - self.width()) // 2
        y = parent.height() - self.height() - 40
        self.move(max(0, x), max(0, y))

        self.show()
        self.raise_()
        self._timer.start(self.duration_ms)
