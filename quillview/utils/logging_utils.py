"""
Application-wide logging setup.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .resource_loader import get_app_data_dir


def configure_logging(*, debug: bool = False, log_path: Optional[str] = None) -> None:
    """Configure app-wide logging.

    - Always logs to a rotating file in the app data directory
    - Also logs to the console when debug is enabled
    """
    debug = debug or os.environ.get("QUILLVIEW_DEBUG") == "1"
    level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicating handlers if main() runs more than once
    if getattr(root, "_quillview_configured", False):
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_path is None:
        env_log_dir = os.environ.get("QUILLVIEW_LOG_DIR")
        log_dir = Path(env_log_dir) if env_log_dir else get_app_data_dir() / "logs"
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = str(log_dir / "quillview.log")
        except OSError:
            log_path = None

    if log_path:
        file_handler = RotatingFileHandler(
            log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    if debug or not log_path:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, "_quillview_configured", True)
