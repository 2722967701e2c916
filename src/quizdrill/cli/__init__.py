"""
CLI Module

Rich output formatting and per-invocation service wiring for the
command-line interface.
"""

from .formatting import (
    console,
    format_question_table,
    format_current_question,
    format_results_summary,
    format_results_table,
    format_tag_table,
)
from .services import get_store, get_question_bank, get_session_store

__all__ = [
    "console",
    "format_question_table",
    "format_current_question",
    "format_results_summary",
    "format_results_table",
    "format_tag_table",
    "get_store",
    "get_question_bank",
    "get_session_store",
]
