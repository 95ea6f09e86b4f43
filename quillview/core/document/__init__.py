"""
PDF document handling.
"""
from .annotation_reader import read_page_annotations
from .pdf_reader import PDFDocumentReader, read_file
from .render_worker import RenderTask, RenderWorker

__all__ = [
    'PDFDocumentReader',
    'RenderTask',
    'RenderWorker',
    'read_file',
    'read_page_annotations',
]
