"""
PDF document loading and page rendering.
"""

import logging
import os
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from PyQt5.QtGui import QImage

from ..annotations.models import RawAnnotation
from ..errors import LoadError, PageRenderError
from ..geometry import Viewport
from .annotation_reader import read_page_annotations

logger = logging.getLogger(__name__)


def read_file(path: str) -> bytes:
    """
    Read a document from disk.

    Args:
        path: Path to the file

    Returns:
        File contents

    Raises:
        LoadError: If the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e.strerror or e}", source=path) from e


class PDFDocumentReader:
    """Handles PDF document loading, rendering, and basic operations."""

    def __init__(self):
        self.doc: Optional[fitz.Document] = None
        self.total_pages: int = 0
        self.file_name: Optional[str] = None
        self.page_sizes: List[Tuple[float, float]] = []

    def load_bytes(self, data: bytes, file_name: str = "document.pdf") -> int:
        """
        Open a document from memory.

        The current document is only replaced once the new one opened
        successfully.

        Args:
            data: PDF bytes
            file_name: Name shown in the UI

        Returns:
            Number of pages

        Raises:
            LoadError: If the data is not a readable PDF
        """
        if not data:
            raise LoadError("The file is empty", source=file_name)

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise LoadError(f"Cannot open {file_name}: {e}", source=file_name) from e

        if doc.needs_pass:
            doc.close()
            raise LoadError(f"{file_name} is password protected", source=file_name)

        if doc.page_count == 0:
            doc.close()
            raise LoadError(f"{file_name} has no pages", source=file_name)

        try:
            sizes = [(page.rect.width, page.rect.height) for page in doc]
        except Exception as e:
            doc.close()
            raise LoadError(f"Cannot read pages of {file_name}: {e}", source=file_name) from e

        self.close_document()
        self.doc = doc
        self.total_pages = doc.page_count
        self.page_sizes = sizes
        self.file_name = file_name

        logger.info("Loaded %s (%d pages)", file_name, self.total_pages)
        return self.total_pages

    def load_pdf(self, file_path: str) -> int:
        """Open a document from disk. Raises LoadError."""
        return self.load_bytes(read_file(file_path), os.path.basename(file_path))

    def close_document(self) -> None:
        """Close the current PDF document and clear all state."""
        if self.doc:
            self.doc.close()
            self.doc = None

        self.total_pages = 0
        self.file_name = None
        self.page_sizes = []

    def get_page(self, page_index: int) -> fitz.Page:
        """
        Get a page object for direct operations.

        Args:
            page_index: 0-based index of the page

        Raises:
            PageRenderError: If there is no such page
        """
        if not self.doc or not (0 <= page_index < self.total_pages):
            raise PageRenderError(page_index, "page does not exist")

        try:
            return self.doc.load_page(page_index)
        except Exception as e:
            raise PageRenderError(page_index, str(e)) from e

    def get_page_size(self, page_index: int) -> Tuple[float, float]:
        """
        Get the size of a page in points.

        Sizes are read once at load time, so this never touches the
        document while a worker is rendering.

        Returns:
            Tuple of (width, height), or (0, 0) for a missing page
        """
        if 0 <= page_index < len(self.page_sizes):
            return self.page_sizes[page_index]
        return 0.0, 0.0

    def get_viewport(self, page_index: int, scale: float) -> Viewport:
        """Viewport of a page rendered at `scale`."""
        return Viewport.for_page(self.get_page(page_index), scale)

    def render_page_image(self, page_index: int, scale: float) -> QImage:
        """
        Rasterize a page.

        Safe to call from a worker thread as long as no other thread uses
        the document at the same time.

        Args:
            page_index: 0-based index of the page
            scale: Zoom factor for rendering

        Returns:
            A QImage that owns its pixel data

        Raises:
            PageRenderError: If rasterization fails
        """
        page = self.get_page(page_index)
        try:
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            img = QImage(
                pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888
            )
            # QImage does not copy the buffer; pix.samples dies with pix
            return img.copy()
        except Exception as e:
            raise PageRenderError(page_index, str(e)) from e

    def get_annotations(self, page_index: int) -> List[RawAnnotation]:
        """
        Read a page's annotations. Queried fresh on every render.

        Returns:
            Raw annotations in document order
        """
        return read_page_annotations(self.doc, self.get_page(page_index))

    def is_loaded(self) -> bool:
        """Check if a document is currently loaded."""
        return self.doc is not None

    def get_page_count(self) -> int:
        """Get the total number of pages."""
        return self.total_pages
