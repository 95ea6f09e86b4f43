"""
Main application window for the Quillview PDF annotation viewer.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSizePolicy,
    QSpacerItem,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from quillview.config import DEFAULT_CONFIG, ViewerConfig
from quillview.controllers import UserInputHandler, ViewController
from quillview.core.document import PDFDocumentReader
from quillview.core.errors import LoadError
from quillview.styles import ThemeManager
from quillview.ui.widgets import AnnotationPopup, CopyNotice, PDFViewer, ThumbnailStrip
from quillview.utils import copy_text

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, file_path: Optional[str] = None, config: ViewerConfig = DEFAULT_CONFIG):
        super().__init__()

        self.config = config

        # Initialize core components
        self._init_core_components()

        # Initialize controllers
        self._init_controllers()

        # Setup UI
        self._setup_window()
        self._setup_ui()
        self._setup_connections()

        # Apply initial theme
        self._apply_theme()

        # Load file if provided
        if file_path:
            self.load_pdf(file_path)

    def _init_core_components(self):
        """Initialize core business logic components."""
        self.pdf_reader = PDFDocumentReader()

        # View state
        self.dark_mode = True
        self._thumbnails_pending = False

        # File state
        self.current_file_path: Optional[str] = None

    def _init_controllers(self):
        """Initialize application controllers."""
        # Create scroll area and page container first
        self.page_container = QWidget()
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setWidget(self.page_container)
        self.scroll_area.setAlignment(Qt.AlignHCenter | Qt.AlignTop)

        # Input handler
        self.input_handler = UserInputHandler(self)

        # Page render pipeline
        self.page_manager = PDFViewer(
            page_container=self.page_container,
            scroll_area=self.scroll_area,
            reader=self.pdf_reader,
            config=self.config,
        )

        # View controller
        self.view_controller = ViewController(self.scroll_area, self.page_manager, self.config)

    def _setup_window(self):
        """Setup main window properties."""
        self.setWindowTitle("Quillview")
        self.setMinimumSize(800, 600)
        self.setAcceptDrops(True)

    def _setup_ui(self):
        """Setup the user interface."""
        self._create_toolbar()

        self.thumbnail_strip = ThumbnailStrip()
        self.thumbnail_strip.hide()

        self._setup_layout()

        self.copy_notice = CopyNotice(self, self.config.copy_notice_ms)

    def _create_toolbar(self):
        """Create the top toolbar."""
        self.top_frame = QFrame()
        self.top_frame.setObjectName("TopFrame")
        self.top_layout = QHBoxLayout(self.top_frame)
        self.top_layout.setContentsMargins(10, 8, 10, 8)
        self.top_layout.setSpacing(8)

        # File operations
        self._add_toolbar_button("Open", "Open PDF (Ctrl+O)", self.open_pdf)

        self._add_toolbar_spacer(15)

        # File info
        self.file_name_label = QLabel("No PDF Loaded", self.top_frame)
        self.file_name_label.setObjectName("statusLabel")
        self.top_layout.addWidget(self.file_name_label)

        self._add_toolbar_spacer(40, expanding=True)

        # Page indicator
        self.page_label = QLabel("0 / 0", self.top_frame)
        self.page_label.setAlignment(Qt.AlignCenter)
        self.page_label.setMinimumWidth(70)
        self.top_layout.addWidget(self.page_label)

        self._add_toolbar_separator()

        # Zoom controls
        self._create_zoom_controls()

        self._add_toolbar_spacer(40, expanding=True)
        self._add_toolbar_separator()

        # Theme toggle
        self.toggle_button = self._add_toolbar_button(
            "Light", "Switch to Light Mode", self.toggle_theme
        )

    def _add_toolbar_button(self, text: str, tooltip: str, callback) -> QToolButton:
        """Add a button to the toolbar."""
        btn = QToolButton(self.top_frame)
        btn.setText(text)
        btn.setToolTip(tooltip)
        btn.setFocusPolicy(Qt.NoFocus)
        btn.clicked.connect(callback)
        self.top_layout.addWidget(btn)
        return btn

    def _add_toolbar_separator(self):
        """Add a separator to the toolbar."""
        separator = QFrame()
        separator.setFrameShape(QFrame.VLine)
        separator.setFrameShadow(QFrame.Sunken)
        separator.setStyleSheet("background-color: #555555; max-width: 1px;")
        self.top_layout.addWidget(separator)

    def _add_toolbar_spacer(self, width: int, expanding: bool = False):
        """Add a spacer to the toolbar."""
        policy = QSizePolicy.Expanding if expanding else QSizePolicy.Fixed
        spacer = QSpacerItem(width, 20, policy, QSizePolicy.Minimum)
        self.top_layout.addSpacerItem(spacer)

    def _create_zoom_controls(self):
        """Create zoom controls."""
        self._add_toolbar_button("-", "Zoom Out (Ctrl+-)", self.view_controller.zoom_out)

        self.zoom_label = QLabel("100%", self.top_frame)
        self.zoom_label.setAlignment(Qt.AlignCenter)
        self.zoom_label.setMinimumWidth(50)
        self.top_layout.addWidget(self.zoom_label)

        self._add_toolbar_button("+", "Zoom In (Ctrl++)", self.view_controller.zoom_in)
        self._add_toolbar_button("1:1", "Actual Size (Ctrl+0)", self.view_controller.actual_size)
        self._add_toolbar_button("Fit", "Fit to Width", self.view_controller.fit_to_width)

    def _setup_layout(self):
        """Setup the main window layout."""
        # Horizontal layout for thumbnails and content
        content_layout = QHBoxLayout()
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)

        content_layout.addWidget(self.thumbnail_strip)
        content_layout.addWidget(self.scroll_area)

        content_widget = QWidget()
        content_widget.setLayout(content_layout)

        # Main vertical layout
        main_layout = QVBoxLayout()
        main_layout.setSpacing(0)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(self.top_frame)
        main_layout.addWidget(content_widget)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

    def _setup_connections(self):
        """Setup signal/slot connections."""
        # View controller connections
        self.view_controller.page_changed.connect(self._on_page_changed)
        self.view_controller.zoom_changed.connect(self._on_zoom_changed)

        # Render pipeline
        self.page_manager.render_finished.connect(self._on_render_finished)
        self.page_manager.popup_focused.connect(self.view_controller.set_active_page)

        # Thumbnails
        self.thumbnail_strip.page_clicked.connect(self.view_controller.go_to_page)

        # The scroll area would otherwise swallow the navigation keys
        self.scroll_area.installEventFilter(self)

    def _apply_theme(self):
        """Apply the current theme."""
        ThemeManager.apply_theme(self, self.dark_mode)
        self.page_manager.set_dark_mode(self.dark_mode)

    # Document Management Methods

    def load_pdf(self, file_path: str) -> bool:
        """
        Load a PDF file.

        On failure the error is shown and the current document stays open.

        Returns:
            True if the document was loaded
        """
        was_rendering = self.page_manager.is_rendering()
        # The reader is about to swap documents under the worker
        self.page_manager.cancel()

        try:
            total_pages = self.pdf_reader.load_pdf(file_path)
        except LoadError as e:
            logger.error("Load failed: %s", e)
            QMessageBox.critical(self, "Cannot Open PDF", str(e))
            if was_rendering:
                self.page_manager.render_all(self.view_controller.state.zoom)
            return False

        # Update UI
        self.current_file_path = file_path
        self.file_name_label.setText(self.pdf_reader.file_name)
        self.setWindowTitle(f"Quillview - {self.pdf_reader.file_name}")

        self.thumbnail_strip.clear_thumbnails()
        self.thumbnail_strip.show()
        self._thumbnails_pending = True

        self.view_controller.open_document(total_pages)
        self._update_page_label()
        return True

    def open_pdf(self):
        """Open a PDF file dialog."""
        file_path, _ = QFileDialog.getOpenFileName(self, "Open PDF", "", "PDF Files (*.pdf)")
        if file_path:
            self.load_pdf(file_path)

    # Navigation and Zoom

    def _on_page_changed(self, page_num: int):
        self._update_page_label()
        self.thumbnail_strip.set_active(page_num)

    def _on_zoom_changed(self, zoom: float):
        self.zoom_label.setText(f"{self.view_controller.state.zoom_percent}%")

    def _update_page_label(self):
        state = self.view_controller.state
        current = state.current_page if state.page_count else 0
        self.page_label.setText(f"{current} / {state.page_count}")

    def _on_render_finished(self, generation: int):
        if not self._thumbnails_pending:
            return

        self._thumbnails_pending = False
        self.thumbnail_strip.load_thumbnails(self.page_manager.render_thumbnails())
        self.thumbnail_strip.set_active(self.view_controller.get_current_page())

    # Theme Methods

    def toggle_theme(self):
        """Toggle between dark and light themes."""
        self.dark_mode = not self.dark_mode

        if self.dark_mode:
            self.toggle_button.setText("Light")
            self.toggle_button.setToolTip("Switch to Light Mode")
        else:
            self.toggle_button.setText("Dark")
            self.toggle_button.setToolTip("Switch to Dark Mode")

        self._apply_theme()

    # Clipboard

    def copy_selected_text(self) -> bool:
        """
        Copy the focused popup's selected text to the clipboard.

        Returns:
            True if there was a selection to copy
        """
        focused = QApplication.focusWidget()
        if not isinstance(focused, AnnotationPopup):
            return False

        text = focused.selectedText()
        if not text:
            return False

        if copy_text(text):
            self.copy_notice.show_message("Copied to clipboard")
        return True

    # Event Handlers

    def keyPressEvent(self, event):  # type: ignore[override]
        """Handle keyboard shortcuts."""
        if not self.input_handler.handle_key_press(event):
            super().keyPressEvent(event)

    def eventFilter(self, obj, event):  # type: ignore[override]
        if obj is self.scroll_area and event.type() == QEvent.KeyPress:
            return self.input_handler.handle_key_press(event)
        return super().eventFilter(obj, event)

    def dragEnterEvent(self, event):  # type: ignore[override]
        if self._dropped_pdf(event) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):  # type: ignore[override]
        file_path = self._dropped_pdf(event)
        if file_path is None:
            event.ignore()
            return
        event.acceptProposedAction()
        self.load_pdf(file_path)

    @staticmethod
    def _dropped_pdf(event) -> Optional[str]:
        mime = event.mimeData()
        if not mime.hasUrls():
            return None
        for url in mime.urls():
            path = url.toLocalFile()
            if path.lower().endswith(".pdf"):
                return path
        return None

    def closeEvent(self, event):  # type: ignore[override]
        """Stop rendering before the document goes away."""
        self.page_manager.close()
        self.pdf_reader.close_document()
        event.accept()
