"""
Demo Question Set

A fixed set of sample questions for trying the tool without authoring
anything first.
"""

from dataclasses import replace
from typing import List

from ..core.session import TestSession, start_session
from ..core.types import Question, QuestionSource
from ..storage.question_bank import QuestionBank
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEMO_QUESTIONS = (
    Question(id="demo_1", prompt="What is the capital of France?",
             expected_answer="Paris", source=QuestionSource.DEMO, tags=["geography"]),
    Question(id="demo_2", prompt="Who wrote 'Romeo and Juliet'?",
             expected_answer="William Shakespeare", source=QuestionSource.DEMO, tags=["literature"]),
    Question(id="demo_3", prompt="What is 2 + 2?",
             expected_answer="4", source=QuestionSource.DEMO, tags=["math"]),
    Question(id="demo_4", prompt="What is the largest planet in our solar system?",
             expected_answer="Jupiter", source=QuestionSource.DEMO, tags=["science"]),
    Question(id="demo_5", prompt="What is the chemical symbol for Gold?",
             expected_answer="Au", source=QuestionSource.DEMO, tags=["science"]),
)


def load_demo_questions() -> List[Question]:
    """Fresh copies of the demo questions."""
    return [replace(q, tags=list(q.tags) if q.tags else None) for q in DEMO_QUESTIONS]


def start_demo_session(bank: QuestionBank) -> TestSession:
    """
    Overwrite the bank with the demo set and start a session over it.

    The bank is overwritten so the session's questions always resolve.
    """
    bank.replace_all(load_demo_questions())
    logger.info("Loaded demo question set into the bank")
    return start_session(bank.question_ids(), source=QuestionSource.DEMO)
