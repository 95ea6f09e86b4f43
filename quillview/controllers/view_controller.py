"""
Controller for zoom, scroll tracking and page navigation.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal
from PyQt5.QtWidgets import QScrollArea

from quillview.config import DEFAULT_CONFIG, ViewerConfig
from quillview.core.view_state import (
    ScrollFraction,
    ViewState,
    fit_width_zoom,
    page_at_midpoint,
    zoom_differs,
    zoom_in,
    zoom_out,
)

logger = logging.getLogger(__name__)


class ViewController(QObject):
    """
    Manages view state and page navigation for the PDF viewer.

    The controller owns the ViewState; zooming re-renders every page
    through the viewer and keeps the scroll position at the same relative
    place in the document.
    """

    # Signals
    page_changed = pyqtSignal(int)  # 1-based page number
    zoom_changed = pyqtSignal(float)  # new zoom factor

    def __init__(self, scroll_area: QScrollArea, viewer, config: ViewerConfig = DEFAULT_CONFIG):
        super().__init__()

        self.scroll_area = scroll_area
        self.viewer = viewer
        self.config = config
        self.state = ViewState(config=config)

        # Set while a zoom re-render or a programmatic jump moves the
        # scroll bars; those moves must not change the active page
        self._suppress_scroll = False

        # Scroll position captured before a zoom whose restore has not run
        # yet; later zooms in the same burst reuse it
        self._pending_fraction: Optional[ScrollFraction] = None

        self._scroll_timer = QTimer(self)
        self._scroll_timer.setSingleShot(True)
        self._scroll_timer.setInterval(config.scroll_debounce_ms)
        self._scroll_timer.timeout.connect(self.update_active_page_from_scroll)

        self.scroll_area.verticalScrollBar().valueChanged.connect(self._on_scroll)
        self.scroll_area.horizontalScrollBar().valueChanged.connect(self._on_scroll)

    # ===== Document =====

    def set_document_info(self, total_pages: int) -> None:
        """
        Reset navigation for a newly loaded document.

        Args:
            total_pages: Total number of pages in the document
        """
        self._scroll_timer.stop()
        self._pending_fraction = None
        self._suppress_scroll = False
        self.state.reset(total_pages)
        self.page_changed.emit(self.state.current_page)

    def open_document(self, total_pages: int) -> None:
        """
        Show a newly loaded document from its first page.

        The first render uses the fit-to-width zoom when one can be computed.

        Args:
            total_pages: Total number of pages in the document
        """
        self.set_document_info(total_pages)
        self.scroll_area.horizontalScrollBar().setValue(0)
        self.scroll_area.verticalScrollBar().setValue(0)

        page_width, _ = self.viewer.reader.get_page_size(0)
        target = fit_width_zoom(self.scroll_area.viewport().width(), page_width, self.config)
        self.apply_zoom(target if target is not None else self.state.zoom, force=True)

    def has_document(self) -> bool:
        return self.state.page_count > 0

    # ===== Zoom =====

    def zoom_in(self) -> None:
        self.apply_zoom(zoom_in(self.state.zoom, self.config))

    def zoom_out(self) -> None:
        self.apply_zoom(zoom_out(self.state.zoom, self.config))

    def actual_size(self) -> None:
        """Reset zoom to 100%."""
        self.apply_zoom(1.0)

    def fit_to_width(self) -> None:
        """Zoom so the first page fills the viewer width."""
        if not self.has_document():
            return

        page_width, _ = self.viewer.reader.get_page_size(0)
        target = fit_width_zoom(self.scroll_area.viewport().width(), page_width, self.config)
        if target is None:
            logger.debug("Fit to width skipped: no usable widths")
            return

        if zoom_differs(self.state.zoom, target, self.config):
            self.apply_zoom(target)

    def apply_zoom(self, zoom: float, force: bool = False) -> None:
        """
        Change the zoom and re-render every page.

        Args:
            zoom: Requested zoom factor, clamped to the allowed range
            force: Re-render even if the zoom did not change
        """
        old_zoom = self.state.zoom
        new_zoom = self.state.set_zoom(zoom)

        if new_zoom == old_zoom and not force:
            return

        self.zoom_changed.emit(new_zoom)

        if not self.has_document():
            return

        if self._pending_fraction is None:
            hsb = self.scroll_area.horizontalScrollBar()
            vsb = self.scroll_area.verticalScrollBar()
            self._pending_fraction = ScrollFraction.capture(
                hsb.value(), hsb.maximum(), vsb.value(), vsb.maximum()
            )

        self._suppress_scroll = True
        self._scroll_timer.stop()

        self.viewer.render_all(new_zoom)

        # Restore once the new layout has settled
        QTimer.singleShot(0, self._restore_scroll)

    def _restore_scroll(self) -> None:
        fraction = self._pending_fraction
        if fraction is None:
            return
        self._pending_fraction = None

        hsb = self.scroll_area.horizontalScrollBar()
        vsb = self.scroll_area.verticalScrollBar()
        x, y = fraction.restore(hsb.maximum(), vsb.maximum())

        hsb.setValue(x)
        vsb.setValue(y)
        self.state.scroll_x, self.state.scroll_y = hsb.value(), vsb.value()

        self._scroll_timer.stop()
        self._suppress_scroll = False

    # ===== Navigation =====

    def go_to_page(self, page_num: int) -> None:
        """
        Scroll so a page's top sits just below the top of the viewer.

        Args:
            page_num: 1-based page number, out-of-range values are ignored
        """
        if not (1 <= page_num <= self.state.page_count):
            return

        top = self.viewer.page_top(page_num)
        if top is None:
            return

        self._scroll_timer.stop()
        self._suppress_scroll = True
        try:
            self.scroll_area.verticalScrollBar().setValue(max(0, top - self.config.page_top_margin))
        finally:
            self._suppress_scroll = False

        self._set_current_page(page_num)

    def next_page(self) -> None:
        self.go_to_page(self.state.current_page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.state.current_page - 1)

    def first_page(self) -> None:
        self.go_to_page(1)

    def last_page(self) -> None:
        self.go_to_page(self.state.page_count)

    def get_current_page(self) -> int:
        return self.state.current_page

    def set_active_page(self, page_num: int) -> None:
        """Mark a page active without scrolling, e.g. when one of its popups is clicked."""
        if 1 <= page_num <= self.state.page_count:
            self._scroll_timer.stop()
            self._set_current_page(page_num)

    # ===== Scroll Tracking =====

    def _on_scroll(self, value: int) -> None:
        """Handle scroll events; the active page is updated once scrolling settles."""
        if self._suppress_scroll or not self.has_document():
            return
        self._scroll_timer.start()

    def update_active_page_from_scroll(self) -> Optional[int]:
        """
        Make the page at the middle of the viewer the active page.

        Returns:
            The page found, or None if the middle falls between pages
        """
        vsb = self.scroll_area.verticalScrollBar()
        self.state.scroll_x = self.scroll_area.horizontalScrollBar().value()
        self.state.scroll_y = vsb.value()

        page_num = page_at_midpoint(
            self.viewer.page_spans(), vsb.value(), self.scroll_area.viewport().height()
        )
        if page_num is not None:
            self._set_current_page(page_num)
        return page_num

    def _set_current_page(self, page_num: int) -> None:
        if page_num != self.state.current_page:
            self.state.set_page(page_num)
            self.page_changed.emit(self.state.current_page)
