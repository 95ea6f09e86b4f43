"""
Utility functions and helpers.
"""
from .clipboard import copy_text
from .logging_utils import configure_logging
from .resource_loader import get_app_data_dir
from .subscriptions import Subscriptions

__all__ = [
    'configure_logging',
    'copy_text',
    'get_app_data_dir',
    'Subscriptions',
]
