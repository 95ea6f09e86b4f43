"""
Tests for clipboard access, signal subscriptions and logging setup.

Run with: python -m pytest tests/test_utils.py -v
"""

import logging
import sys
from unittest.mock import MagicMock, patch

import pyperclip
import pytest
from PyQt5.QtCore import QObject, pyqtSignal

from quillview.utils import Subscriptions, copy_text, get_app_data_dir
from quillview.utils import logging_utils


class _Emitter(QObject):
    fired = pyqtSignal(int)


class TestCopyText:
    """Tests for the clipboard fallback chain."""

    def test_pyperclip_first(self):
        fallback = MagicMock()
        with patch("quillview.utils.clipboard.pyperclip.copy") as copy:
            assert copy_text("hello", fallback=fallback) is True

        copy.assert_called_once_with("hello")
        fallback.assert_not_called()

    def test_falls_back_when_pyperclip_fails(self):
        fallback = MagicMock()
        with patch(
            "quillview.utils.clipboard.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no clipboard"),
        ):
            assert copy_text("hello", fallback=fallback) is True

        fallback.assert_called_once_with("hello")

    def test_total_failure_is_logged_not_raised(self, caplog):
        fallback = MagicMock(side_effect=RuntimeError("broken"))
        with patch(
            "quillview.utils.clipboard.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no clipboard"),
        ):
            with caplog.at_level(logging.WARNING):
                assert copy_text("hello", fallback=fallback) is False

        assert "Copy to clipboard failed" in caplog.text

    def test_qt_clipboard_fallback(self, qapp):
        with patch(
            "quillview.utils.clipboard.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no clipboard"),
        ):
            assert copy_text("via qt") is True

        assert qapp.clipboard().text() == "via qt"

    def test_empty_text(self):
        with patch("quillview.utils.clipboard.pyperclip.copy") as copy:
            assert copy_text("") is False

        copy.assert_not_called()


class TestSubscriptions:
    """Tests for grouped signal teardown."""

    def test_clear_disconnects(self, qapp):
        emitter = _Emitter()
        received = []
        subs = Subscriptions()
        subs.connect(emitter.fired, received.append)

        emitter.fired.emit(1)
        subs.clear()
        emitter.fired.emit(2)

        assert received == [1]
        assert len(subs) == 0

    def test_clear_twice_is_harmless(self, qapp):
        emitter = _Emitter()
        subs = Subscriptions()
        subs.connect(emitter.fired, lambda value: None)

        subs.clear()
        subs.clear()

        assert len(subs) == 0


class TestAppDataDir:
    """Tests for platform data directories."""

    @pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG paths are Linux only")
    def test_xdg_data_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_app_data_dir("Quillview") == tmp_path / "Quillview"


class TestConfigureLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        configured = getattr(root, "_quillview_configured", False)
        if configured:
            delattr(root, "_quillview_configured")
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)
        if hasattr(root, "_quillview_configured"):
            delattr(root, "_quillview_configured")
        if configured:
            setattr(root, "_quillview_configured", True)

    def test_writes_to_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("QUILLVIEW_LOG_DIR", str(tmp_path))
        monkeypatch.delenv("QUILLVIEW_DEBUG", raising=False)

        logging_utils.configure_logging()
        logging.getLogger("quillview.test").info("hello log")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello log" in (tmp_path / "quillview.log").read_text(encoding="utf-8")

    def test_idempotent(self, monkeypatch, tmp_path):
        monkeypatch.setenv("QUILLVIEW_LOG_DIR", str(tmp_path))

        logging_utils.configure_logging()
        count = len(logging.getLogger().handlers)
        logging_utils.configure_logging()

        assert len(logging.getLogger().handlers) == count

    def test_debug_level(self, tmp_path):
        logging_utils.configure_logging(debug=True, log_path=str(tmp_path / "debug.log"))

        assert logging.getLogger().level == logging.DEBUG
