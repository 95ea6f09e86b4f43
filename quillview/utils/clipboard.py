"""
Clipboard access with a fallback chain.
"""
import logging
from typing import Callable, Optional

import pyperclip
from PyQt5.QtWidgets import QApplication

from quillview.core.errors import ClipboardError

logger = logging.getLogger(__name__)


def _qt_clipboard_copy(text: str) -> None:
    app = QApplication.instance()
    if app is None:
        raise ClipboardError("no QApplication for the Qt clipboard")
    clipboard = app.clipboard()
    if clipboard is None:
        raise ClipboardError("Qt clipboard unavailable")
    clipboard.setText(text)


def copy_text(text: str, fallback: Optional[Callable[[str], None]] = None) -> bool:
    """
    Copy text to the system clipboard.

    Tries pyperclip first, then the Qt clipboard. Failures are logged and
    never raised.

    Args:
        text: Text to copy
        fallback: Replacement for the Qt clipboard copy

    Returns:
        True if the text reached a clipboard
    """
    if not text:
        return False

    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException as e:
        logger.debug("pyperclip copy failed, using Qt clipboard: %s", e)

    try:
        (fallback or _qt_clipboard_copy)(text)
        return True
    except Exception as e:
        logger.warning("Copy to clipboard failed: %s", e)
        return False
