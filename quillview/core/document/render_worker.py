"""
Background worker for page rasterization.
"""

from dataclasses import dataclass

from PyQt5.QtCore import QThread, pyqtSignal

from ..errors import PageRenderError, RenderCancelled


@dataclass
class RenderTask:
    """One page rasterization request."""

    page_index: int
    scale: float
    generation: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_current(self, generation: int) -> bool:
        """A result may only be applied if its task is still wanted."""
        return not self.cancelled and self.generation == generation


class RenderWorker(QThread):
    """Rasterizes one page without freezing the UI."""

    # Signals
    rendered = pyqtSignal(object, object)  # RenderTask, QImage
    failed = pyqtSignal(object, str)  # RenderTask, error message
    cancelled = pyqtSignal(object)  # RenderTask

    def __init__(self, reader, task: RenderTask, parent=None):
        super().__init__(parent)
        self._reader = reader
        self.task = task

    def cancel(self):
        """
        Ask the worker to stop.

        PyMuPDF cannot abort a rasterization midway, so a result may still
        arrive; the task is flagged so it gets discarded.
        """
        self.task.cancel()

    def run(self):
        """Render the page in the background thread."""
        task = self.task
        try:
            if task.cancelled:
                raise RenderCancelled(task.page_index, task.generation)

            image = self._reader.render_page_image(task.page_index, task.scale)

            if task.cancelled:
                raise RenderCancelled(task.page_index, task.generation)

            self.rendered.emit(task, image)

        except RenderCancelled:
            self.cancelled.emit(task)
        except PageRenderError as e:
            self.failed.emit(task, str(e))
        except Exception as e:
            self.failed.emit(task, str(PageRenderError(task.page_index, str(e))))
