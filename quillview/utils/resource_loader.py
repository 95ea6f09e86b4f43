"""
Locations for per-user application data.
"""
import os
import sys
from pathlib import Path

APP_NAME = "Quillview"


def get_app_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the application data directory for storing user data.

    The directory is not created here.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('LOCALAPPDATA') or os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.environ.get('XDG_DATA_HOME') or os.path.expanduser('~/.local/share')

    return Path(base_dir) / app_name
