"""
Core logic for Quillview: geometry, annotations, view state and documents.
"""

from .errors import (
    AnnotationRenderError,
    ClipboardError,
    LoadError,
    PageRenderError,
    QuillviewError,
    RenderCancelled,
)
from .geometry import Viewport, to_viewport_point, to_viewport_rect
from .view_state import ScrollFraction, ViewState

__all__ = [
    "AnnotationRenderError",
    "ClipboardError",
    "LoadError",
    "PageRenderError",
    "QuillviewError",
    "RenderCancelled",
    "ScrollFraction",
    "ViewState",
    "Viewport",
    "to_viewport_point",
    "to_viewport_rect",
]
