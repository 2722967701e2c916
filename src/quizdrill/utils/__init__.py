"""
Utils Module

Logging configuration and CLI help rendering.
"""

from .logging import setup_logging, get_logger, get_session_logger, PerformanceTimer
from .help_text import show_help_with_markdown

__all__ = [
    "setup_logging",
    "get_logger",
    "get_session_logger",
    "PerformanceTimer",
    "show_help_with_markdown",
]
