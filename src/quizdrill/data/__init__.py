"""
Data Module

Question sources beyond manual authoring: document text extraction and
the built-in demo set.
"""

from .extraction import DocumentExtractor, ExtractedDocument, sanitize_text
from .demo import DEMO_QUESTIONS, load_demo_questions, start_demo_session

__all__ = [
    "DocumentExtractor",
    "ExtractedDocument",
    "sanitize_text",
    "DEMO_QUESTIONS",
    "load_demo_questions",
    "start_demo_session",
]
