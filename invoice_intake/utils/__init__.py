"""
Utility Module for Invoice Intake.

Common utilities used across all other modules:
    - Logging configuration
    - Exceptions
    - File and money helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension, money_to_float

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'money_to_float'
]
