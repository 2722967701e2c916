"""
Storage Module

Key-value persistence over SQLAlchemy, the question bank repository and
the active test session slot.
"""

from .models import StoredValue
from .kv_store import KeyValueStore
from .question_bank import QuestionBank, index_questions, QUESTION_BANK_KEY
from .session_store import SessionStore, ACTIVE_SESSION_KEY

__all__ = [
    "StoredValue",
    "KeyValueStore",
    "QuestionBank",
    "index_questions",
    "QUESTION_BANK_KEY",
    "SessionStore",
    "ACTIVE_SESSION_KEY",
]
