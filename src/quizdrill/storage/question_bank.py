"""
Question Bank

The user's collection of authored question/expected-answer pairs, loaded
from and saved to the key-value store after every change.

Invalid input (blank prompt or answer, unknown id) is ignored rather than
raised: methods return None or False so callers can give feedback.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .kv_store import KeyValueStore
from ..core.exceptions import ValidationError
from ..core.types import Question, QuestionSource, QuestionType, normalize_tags
from ..utils.logging import get_logger

logger = get_logger(__name__)

QUESTION_BANK_KEY = "manualQuestionBank_v1"


def index_questions(questions: Iterable[Question]) -> Dict[str, Question]:
    """Build an id -> question mapping. The first question wins on duplicate ids."""
    index: Dict[str, Question] = {}
    for question in questions:
        index.setdefault(question.id, question)
    return index


class QuestionBank:
    """Mutable question collection persisted in a key-value store."""

    def __init__(self, store: KeyValueStore, storage_key: str = QUESTION_BANK_KEY):
        self.store = store
        self.storage_key = storage_key
        self._questions: List[Question] = self._load()

    def _load(self) -> List[Question]:
        raw_records = self.store.load(self.storage_key, [])
        if not isinstance(raw_records, list):
            logger.warning(f"Question bank under '{self.storage_key}' is not a list, starting empty")
            return []

        questions: List[Question] = []
        seen = set()
        for record in raw_records:
            try:
                question = Question.from_dict(record)
            except ValidationError as e:
                logger.warning(f"Skipping malformed question record: {e}")
                continue
            if question.id in seen:
                logger.warning(f"Skipping duplicate question id: {question.id}")
                continue
            seen.add(question.id)
            questions.append(question)

        logger.debug(f"Loaded {len(questions)} questions from '{self.storage_key}'")
        return questions

    def _save(self) -> None:
        self.store.save(self.storage_key, [q.to_dict() for q in self._questions])

    @property
    def questions(self) -> List[Question]:
        return list(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(list(self._questions))

    def get(self, question_id: str) -> Optional[Question]:
        for question in self._questions:
            if question.id == question_id:
                return question
        return None

    def index(self) -> Dict[str, Question]:
        """Snapshot id -> question mapping for lookups during a session pass."""
        return index_questions(self._questions)

    def question_ids(self, tag: Optional[str] = None) -> List[str]:
        """Ids in bank order, optionally restricted to questions with ``tag``."""
        return [q.id for q in self._questions if tag is None or q.has_tag(tag)]

    def tags(self) -> List[str]:
        found = {tag for q in self._questions for tag in (q.tags or [])}
        return sorted(found)

    def _new_id(self) -> str:
        existing = {q.id for q in self._questions}
        question_id = Question.new_id()
        while question_id in existing:
            question_id = Question.new_id()
        return question_id

    def add_question(self, prompt: str, expected_answer: str,
                     source: QuestionSource = QuestionSource.MANUAL,
                     tags: Optional[Iterable[str]] = None) -> Optional[Question]:
        """
        Add a question.

        Returns:
            The stored question, or None when the prompt or expected answer
            is blank (nothing is stored).
        """
        prompt = (prompt or "").strip()
        expected_answer = (expected_answer or "").strip()

        if not prompt or not expected_answer:
            logger.debug("Ignoring question with blank prompt or expected answer")
            return None

        question = Question(
            id=self._new_id(),
            prompt=prompt,
            expected_answer=expected_answer,
            type=QuestionType.OPEN_TEXT,
            source=QuestionSource(source),
            tags=normalize_tags(tags),
        )
        self._questions.append(question)
        self._save()
        logger.info(f"Added question {question.id}")
        return question

    def update_question(self, question_id: str, prompt: Optional[str] = None,
                        expected_answer: Optional[str] = None) -> Optional[Question]:
        """
        Update a question's prompt and/or expected answer.

        Blank values keep the previous text. Returns None for an unknown id.
        """
        new_prompt = (prompt or "").strip()
        new_answer = (expected_answer or "").strip()

        for position, question in enumerate(self._questions):
            if question.id != question_id:
                continue

            updated = Question(
                id=question.id,
                prompt=new_prompt or question.prompt,
                expected_answer=new_answer or question.expected_answer,
                type=question.type,
                source=question.source,
                tags=question.tags,
            )
            self._questions[position] = updated
            self._save()
            logger.info(f"Updated question {question_id}")
            return updated

        logger.debug(f"Update ignored, unknown question id: {question_id}")
        return None

    def delete_question(self, question_id: str) -> bool:
        remaining = [q for q in self._questions if q.id != question_id]
        if len(remaining) == len(self._questions):
            return False

        self._questions = remaining
        self._save()
        logger.info(f"Deleted question {question_id}")
        return True

    def clear(self) -> None:
        self._questions = []
        self._save()
        logger.info("Cleared question bank")

    def replace_all(self, questions: Iterable[Question]) -> int:
        """
        Replace the whole bank (used when loading the demo set).

        Questions with a blank prompt or expected answer, or a repeated id,
        are dropped. Returns the number of questions kept.
        """
        kept: List[Question] = []
        seen = set()
        for question in questions:
            if question.id in seen or not question.prompt.strip() or not question.is_scorable:
                continue
            seen.add(question.id)
            kept.append(question)

        self._questions = kept
        self._save()
        logger.info(f"Replaced question bank with {len(kept)} questions")
        return len(kept)
