from typing import List

from PyQt5.QtCore import QSize, Qt, pyqtSignal
from PyQt5.QtGui import QIcon, QImage, QPixmap
from PyQt5.QtWidgets import QListView, QListWidget, QListWidgetItem


class ThumbnailStrip(QListWidget):
    """Sidebar with one small image per page."""

    page_clicked = pyqtSignal(int)  # 1-based page number

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListView.ListMode)
        self.setIconSize(QSize(120, 160))
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setFixedWidth(170)
        self.setSpacing(4)
        self.itemClicked.connect(self._item_clicked)
        self.setToolTip("Click a page to jump to it.")

    def _item_clicked(self, item):
        page_num = item.data(Qt.UserRole)
        if page_num is not None:
            self.page_clicked.emit(int(page_num))

    def load_thumbnails(self, images: List[QImage]):
        self.clear()
        for index, image in enumerate(images):
            page_num = index + 1
            item = QListWidgetItem(str(page_num))
            if image is not None and not image.isNull():
                item.setIcon(QIcon(QPixmap.fromImage(image)))
            item.setData(Qt.UserRole, page_num)
            item.setTextAlignment(Qt.AlignHCenter)
            item.setToolTip(f"Page {page_num}")
            self.addItem(item)

    def set_active(self, page_num: int):
        """Highlight a page without emitting page_clicked."""
        row = page_num - 1
        if not (0 <= row < self.count()):
            return
        self.blockSignals(True)
        self.setCurrentRow(row)
        self.blockSignals(False)
        self.scrollToItem(self.item(row))

    def clear_thumbnails(self):
        self.clear()
