from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import QApplication

from quillview.core.interaction import SelectAllTarget, resolve_select_all
from quillview.ui.widgets.annotation_popup import AnnotationPopup

NEXT_PAGE_KEYS = (Qt.Key_Right, Qt.Key_Down, Qt.Key_PageDown)
PREVIOUS_PAGE_KEYS = (Qt.Key_Left, Qt.Key_Up, Qt.Key_PageUp)


class UserInputHandler:
    """
    Handles keyboard input for the viewer window.
    """

    def __init__(self, main_window):
        """
        Initializes the handler with a reference to the main window.

        Args:
            main_window (MainWindow): A reference to the main application window.
        """
        self.main_window = main_window

    @property
    def view(self):
        return self.main_window.view_controller

    def handle_key_press(self, event) -> bool:
        """
        Handles key press events for the main window.

        Returns:
            True if the event was consumed
        """
        handled = self._dispatch(event)
        if handled:
            event.accept()
        else:
            event.ignore()
        return handled

    def _dispatch(self, event) -> bool:
        key = event.key()
        ctrl = bool(event.modifiers() & Qt.ControlModifier)

        if event.matches(QKeySequence.Open):
            self.main_window.open_pdf()
            return True
        if event.matches(QKeySequence.Copy):
            return self.main_window.copy_selected_text()
        if event.matches(QKeySequence.SelectAll):
            return self.select_all()
        if event.matches(QKeySequence.Quit) or (ctrl and key == Qt.Key_Q):
            self.main_window.close()
            return True

        if ctrl:
            if key in (Qt.Key_Plus, Qt.Key_Equal):
                self.view.zoom_in()
                return True
            if key in (Qt.Key_Minus, Qt.Key_Underscore):
                self.view.zoom_out()
                return True
            if key == Qt.Key_0:
                self.view.actual_size()
                return True
            return False

        if key in NEXT_PAGE_KEYS:
            self.view.next_page()
            return True
        if key in PREVIOUS_PAGE_KEYS:
            self.view.previous_page()
            return True
        if key == Qt.Key_Home:
            self.view.first_page()
            return True
        if key == Qt.Key_End:
            self.view.last_page()
            return True

        return False

    def select_all(self) -> bool:
        """
        Select the focused popup's text.

        Falls through to the default handling when no popup is focused or
        the popup already has a manual selection.
        """
        focused = QApplication.focusWidget()
        is_popup = isinstance(focused, AnnotationPopup)
        has_selection = is_popup and focused.hasSelectedText()

        if resolve_select_all(is_popup, has_selection) == SelectAllTarget.POPUP:
            focused.select_all_text()
            return True
        return False
