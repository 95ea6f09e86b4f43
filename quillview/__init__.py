"""
Quillview - a PDF viewer that shows a document's native annotations as
interactive, draggable popups over a zoomable page view.
"""

__version__ = "0.3.0"
