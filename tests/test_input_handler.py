"""
Tests for keyboard shortcut dispatch.

Run with: python -m pytest tests/test_input_handler.py -v
"""

from unittest.mock import MagicMock

import pytest
from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QKeyEvent

from quillview.controllers import UserInputHandler


def _key(key, modifiers=Qt.NoModifier, text=""):
    return QKeyEvent(QEvent.KeyPress, key, modifiers, text)


@pytest.fixture
def window():
    main_window = MagicMock()
    main_window.copy_selected_text.return_value = True
    return main_window


@pytest.fixture
def handler(qapp, window):
    return UserInputHandler(window)


class TestShortcuts:
    """Tests for the shortcut table."""

    @pytest.mark.parametrize(
        "key,text",
        [(Qt.Key_Equal, "="), (Qt.Key_Plus, "+")],
    )
    def test_zoom_in(self, handler, window, key, text):
        assert handler.handle_key_press(_key(key, Qt.ControlModifier, text))
        window.view_controller.zoom_in.assert_called_once()

    def test_zoom_out(self, handler, window):
        assert handler.handle_key_press(_key(Qt.Key_Minus, Qt.ControlModifier, "-"))
        window.view_controller.zoom_out.assert_called_once()

    def test_actual_size(self, handler, window):
        assert handler.handle_key_press(_key(Qt.Key_0, Qt.ControlModifier, "0"))
        window.view_controller.actual_size.assert_called_once()

    @pytest.mark.parametrize("key", [Qt.Key_Down, Qt.Key_PageDown, Qt.Key_Right])
    def test_next_page(self, handler, window, key):
        assert handler.handle_key_press(_key(key))
        window.view_controller.next_page.assert_called_once()

    @pytest.mark.parametrize("key", [Qt.Key_Up, Qt.Key_PageUp, Qt.Key_Left])
    def test_previous_page(self, handler, window, key):
        assert handler.handle_key_press(_key(key))
        window.view_controller.previous_page.assert_called_once()

    def test_home_and_end(self, handler, window):
        handler.handle_key_press(_key(Qt.Key_Home))
        handler.handle_key_press(_key(Qt.Key_End))

        window.view_controller.first_page.assert_called_once()
        window.view_controller.last_page.assert_called_once()

    def test_open(self, handler, window):
        assert handler.handle_key_press(_key(Qt.Key_O, Qt.ControlModifier, "o"))
        window.open_pdf.assert_called_once()

    def test_copy(self, handler, window):
        assert handler.handle_key_press(_key(Qt.Key_C, Qt.ControlModifier, "c"))
        window.copy_selected_text.assert_called_once()

    def test_quit(self, handler, window):
        assert handler.handle_key_press(_key(Qt.Key_Q, Qt.ControlModifier, "q"))
        window.close.assert_called_once()

    def test_select_all_without_focused_popup_falls_through(self, handler):
        event = _key(Qt.Key_A, Qt.ControlModifier, "a")

        assert handler.handle_key_press(event) is False
        assert not event.isAccepted()

    def test_unknown_key_is_ignored(self, handler, window):
        event = _key(Qt.Key_Q)

        assert handler.handle_key_press(event) is False
        assert not event.isAccepted()
