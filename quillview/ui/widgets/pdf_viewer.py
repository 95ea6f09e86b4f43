"""
PDF viewer - renders every page with its annotation overlay.
"""

import logging
from typing import List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QImage
from PyQt5.QtWidgets import QScrollArea, QWidget

from quillview.config import DEFAULT_CONFIG, ViewerConfig
from quillview.core.annotations import OverlayRenderer
from quillview.core.document import PDFDocumentReader, RenderTask, RenderWorker
from quillview.core.errors import PageRenderError
from quillview.core.geometry import Viewport
from quillview.utils import Subscriptions

from .page_widget import PageWidget

logger = logging.getLogger(__name__)


class PDFViewer(QObject):
    """
    Manages page display for the loaded document.

    A render pass tears down the previous pages, lays out a placeholder of
    the final size for every page and then rasterizes the pages one after
    another on a worker thread. Each pass gets a new generation number;
    results of an older pass are dropped.
    """

    # Signals
    render_finished = pyqtSignal(int)  # generation
    popup_focused = pyqtSignal(int)  # 1-based page of the focused popup

    def __init__(
        self,
        page_container: QWidget,
        scroll_area: QScrollArea,
        reader: PDFDocumentReader,
        config: ViewerConfig = DEFAULT_CONFIG,
    ):
        super().__init__()

        self.page_container = page_container
        self.scroll_area = scroll_area
        self.reader = reader
        self.config = config
        self.overlay_renderer = OverlayRenderer(config)

        self.dark_mode = False
        self.scale = 1.0
        self.pages: List[PageWidget] = []
        self.generation = 0

        # Render queue state
        self._queue: List[int] = []
        self._worker: Optional[RenderWorker] = None
        self._subscriptions = Subscriptions()

        self.page_container.setObjectName("PageContainer")
        self.page_container.setMinimumSize(0, 0)
        self.page_container.resizeEvent = self.container_resize_event

    # ===== Render Pipeline =====

    def render_all(self, scale: float) -> int:
        """
        Start a new render pass at `scale`.

        Any pass still in flight is cancelled first.

        Args:
            scale: Zoom factor

        Returns:
            The generation number of the new pass
        """
        self.cancel()
        self.generation += 1
        self.scale = scale
        self.clear_all()

        if not self.reader.is_loaded():
            return self.generation

        for index in range(self.reader.get_page_count()):
            self.pages.append(self._create_page(index, scale))

        self._layout_pages()

        self._queue = list(range(len(self.pages)))
        logger.debug(
            "Render pass %d: %d pages at scale %.3f",
            self.generation,
            len(self._queue),
            scale,
        )
        self._start_next()
        return self.generation

    def cancel(self):
        """Stop the current pass and wait for its worker to finish."""
        self._queue = []

        worker = self._worker
        self._worker = None
        if worker is None:
            return

        worker.cancel()
        if worker.isRunning():
            # fitz documents are not thread-safe, nothing else may touch
            # the document until the worker has returned
            worker.wait()

    def is_rendering(self) -> bool:
        return self._worker is not None

    def _create_page(self, index: int, scale: float) -> PageWidget:
        width, height = self.reader.get_page_size(index)
        try:
            viewport = self.reader.get_viewport(index, scale)
        except PageRenderError as e:
            logger.error("%s", e)
            viewport = Viewport.from_size(width, height, scale)

        page = PageWidget(index, viewport, self.config, parent=self.page_container)
        page.overlay.set_dark_mode(self.dark_mode)
        self._subscriptions.connect(
            page.overlay.popup_focused,
            lambda _popup, page_num=page.page_num: self.popup_focused.emit(page_num),
        )
        page.show()
        return page

    def _start_next(self):
        if not self._queue:
            self._worker = None
            self.render_finished.emit(self.generation)
            return

        index = self._queue.pop(0)
        task = RenderTask(index, self.scale, self.generation)
        worker = RenderWorker(self.reader, task, self)
        worker.rendered.connect(self._on_rendered)
        worker.failed.connect(self._on_failed)
        worker.cancelled.connect(self._on_cancelled)
        worker.finished.connect(worker.deleteLater)

        self._worker = worker
        worker.start()

    def _on_rendered(self, task: RenderTask, image: QImage):
        if not task.is_current(self.generation):
            return

        self._wait_for_worker()
        page = self.pages[task.page_index]
        page.set_image(image)
        self._build_overlay(page)
        self._start_next()

    def _on_failed(self, task: RenderTask, message: str):
        if not task.is_current(self.generation):
            return

        self._wait_for_worker()
        logger.error("Render failed: %s", message)
        self.pages[task.page_index].show_error(message)
        self._start_next()

    def _on_cancelled(self, task: RenderTask):
        # Nothing to show for a pass that was replaced
        pass

    def _wait_for_worker(self):
        # Signals arrive just before run() returns
        if self._worker is not None:
            self._worker.wait()

    def _build_overlay(self, page: PageWidget):
        """Read the page's annotations and lay out its overlay."""
        try:
            annotations = self.reader.get_annotations(page.page_index)
        except PageRenderError as e:
            logger.warning("No overlay for page %d: %s", page.page_num, e)
            return

        layer = self.overlay_renderer.render_page(annotations, page.viewport)
        page.overlay.set_layer(layer)

    # ===== Page Management =====

    def clear_all(self):
        """Remove every page widget and its overlay subscriptions."""
        self._subscriptions.clear()
        while self.pages:
            self.pages.pop().release()

        self.page_container.setMinimumSize(0, 0)
        self.page_container.update()

    def close(self):
        """Cancel rendering and drop every page."""
        self.cancel()
        self.generation += 1
        self.clear_all()

    def set_dark_mode(self, dark_mode: bool):
        self.dark_mode = dark_mode
        for page in self.pages:
            page.overlay.set_dark_mode(dark_mode)

    def content_size(self) -> Tuple[int, int]:
        """Size needed to show every page with spacing around it."""
        spacing = self.config.page_spacing
        if not self.pages:
            return 0, 0
        width = max(page.width() for page in self.pages) + 2 * spacing
        height = spacing + sum(page.height() + spacing for page in self.pages)
        return width, height

    def _layout_pages(self):
        width, height = self.content_size()
        self.page_container.setMinimumSize(width, height)

        # Resize now so the scroll area updates its ranges immediately
        viewport = self.scroll_area.viewport()
        self.page_container.resize(max(width, viewport.width()), max(height, viewport.height()))
        self._position_pages()

    def _position_pages(self):
        container_width = self.page_container.width()
        y = self.config.page_spacing
        for page in self.pages:
            x = max(self.config.page_spacing, (container_width - page.width()) // 2)
            page.move(x, y)
            y += page.height() + self.config.page_spacing

    def container_resize_event(self, event):
        """Re-centers pages when the container size changes."""
        self._position_pages()
        event.accept()

    # ===== Navigation Helpers =====

    def page_spans(self) -> List[Tuple[int, int]]:
        """(top, bottom) of every page in container coordinates."""
        return [(page.y(), page.y() + page.height()) for page in self.pages]

    def page_top(self, page_num: int) -> Optional[int]:
        """Top edge of a 1-based page, or None if there is no such page."""
        if not (1 <= page_num <= len(self.pages)):
            return None
        return self.pages[page_num - 1].y()

    def get_page_widget(self, page_num: int) -> Optional[PageWidget]:
        if not (1 <= page_num <= len(self.pages)):
            return None
        return self.pages[page_num - 1]

    # ===== Thumbnails =====

    def render_thumbnails(self) -> List[Optional[QImage]]:
        """
        Rasterize every page at thumbnail scale.

        Must only be called while no render pass is running.
        """
        if self.is_rendering():
            raise RuntimeError("Cannot render thumbnails during a render pass")

        images: List[Optional[QImage]] = []
        for index in range(self.reader.get_page_count()):
            try:
                images.append(self.reader.render_page_image(index, self.config.thumbnail_scale))
            except PageRenderError as e:
                logger.warning("Thumbnail skipped: %s", e)
                images.append(None)
        return images
