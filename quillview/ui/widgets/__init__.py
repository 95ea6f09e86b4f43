"""
Custom widgets for PDF viewing and annotation display.
"""

from .annotation_popup import AnnotationPopup
from .copy_notice import CopyNotice
from .page_widget import AnnotationOverlay, PageWidget
from .pdf_viewer import PDFViewer
from .thumbnail_strip import ThumbnailStrip

__all__ = [
    "AnnotationOverlay",
    "AnnotationPopup",
    "CopyNotice",
    "PageWidget",
    "PDFViewer",
    "ThumbnailStrip",
]
