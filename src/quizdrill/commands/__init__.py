"""
Commands Package

Click command groups for the quizdrill CLI:
- bank.py - Question bank authoring
- test.py - Taking a test session
- results.py - Results, export and review keywords
- document.py - PDF/DOCX text extraction
- demo.py - Demo question set
- config.py - Configuration display and validation
"""

from .bank import bank
from .config import show as config_show, validate as config_validate
from .demo import demo
from .document import document
from .results import results
from .test import quiz

__all__ = [
    'bank',
    'config_show',
    'config_validate',
    'demo',
    'document',
    'results',
    'quiz',
]
