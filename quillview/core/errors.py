"""
Error types raised and contained by the viewer.

Only LoadError is shown to the user. The others are contained at the page or
annotation group level and only reach the log.
"""

from typing import Optional


class QuillviewError(Exception):
    """Base class for viewer errors."""


class LoadError(QuillviewError):
    """The document could not be read or parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class PageRenderError(QuillviewError):
    """Rasterizing a single page failed."""

    def __init__(self, page_index: int, message: str):
        super().__init__(f"Page {page_index + 1}: {message}")
        self.page_index = page_index


class RenderCancelled(QuillviewError):
    """A page render was superseded. Expected, never logged."""

    def __init__(self, page_index: int, generation: int):
        super().__init__(f"Render of page {page_index + 1} cancelled")
        self.page_index = page_index
        self.generation = generation


class AnnotationRenderError(QuillviewError):
    """Building the overlay for one annotation group failed."""

    def __init__(self, annotation_id: str, message: str):
        super().__init__(f"Annotation {annotation_id}: {message}")
        self.annotation_id = annotation_id


class ClipboardError(QuillviewError):
    """Writing to the clipboard failed."""
