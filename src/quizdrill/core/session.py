"""
Test Session State Machine

A test session is one attempt at answering a fixed, ordered list of
questions. Sessions are immutable values: every operation takes the
current session and returns the next one, and the caller decides when
to persist it (see storage.session_store).

States:
    NOT_STARTED  no active session (the caller holds None)
    IN_PROGRESS  started, finished_at is None
    FINISHED     finished_at is set; terminal for answers

No operation raises. Out-of-range navigation is clamped, and edits to a
finished session are ignored.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .exceptions import ValidationError
from .types import Question, QuestionSource, generate_id
from ..utils.logging import get_logger, get_session_logger

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Test session lifecycle states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TestSession:
    """Snapshot of a test run: question order, answers and position."""
    id: str
    source: QuestionSource
    question_ids: Tuple[str, ...]
    answers_by_question: Dict[str, str] = field(default_factory=dict, hash=False)
    current_index: int = 0
    started_at: datetime = field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None

    # Not a test class, despite the name
    __test__ = False

    @property
    def state(self) -> SessionState:
        return SessionState.FINISHED if self.finished_at is not None else SessionState.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None

    @property
    def total(self) -> int:
        return len(self.question_ids)

    @property
    def current_question_id(self) -> Optional[str]:
        if 0 <= self.current_index < len(self.question_ids):
            return self.question_ids[self.current_index]
        return None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def answer_for(self, question_id: str) -> str:
        """Raw stored answer for a question, or an empty string."""
        return self.answers_by_question.get(question_id, "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source.value,
            "questionIds": list(self.question_ids),
            "answersByQuestion": dict(self.answers_by_question),
            "currentIndex": self.current_index,
            "startedAtIso": self.started_at.isoformat(),
            "finishedAtIso": self.finished_at.isoformat() if self.finished_at else "",
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TestSession":
        """
        Rebuild a session from its stored form.

        Raises:
            ValidationError: if required fields are missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("Session record must be a mapping", invalid_value=data)

        try:
            question_ids = data["questionIds"]
            answers = data.get("answersByQuestion") or {}
            if not isinstance(question_ids, list) or not all(isinstance(q, str) for q in question_ids):
                raise ValidationError("questionIds must be a list of strings", field_name="questionIds")
            if not isinstance(answers, dict):
                raise ValidationError("answersByQuestion must be a mapping", field_name="answersByQuestion")

            finished_raw = data.get("finishedAtIso") or None
            session = cls(
                id=str(data["id"]),
                source=QuestionSource(data.get("source", QuestionSource.MANUAL.value)),
                question_ids=tuple(question_ids),
                answers_by_question={str(k): v for k, v in answers.items() if isinstance(v, str)},
                current_index=int(data.get("currentIndex", 0)),
                started_at=_parse_timestamp(data["startedAtIso"]),
                finished_at=_parse_timestamp(finished_raw) if finished_raw else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid session record: {e}") from e

        return replace(session, current_index=_clamp_index(session.current_index, session.total))


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp, reading a trailing Z and naive values as UTC."""
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _clamp_index(index: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(index, total - 1))


def session_state(session: Optional[TestSession]) -> SessionState:
    """State of the active slot, where None means no session has been started."""
    if session is None:
        return SessionState.NOT_STARTED
    return session.state


def start_session(question_ids: Sequence[str],
                  source: QuestionSource = QuestionSource.MANUAL,
                  now: Optional[datetime] = None) -> TestSession:
    """
    Start a new session over the given question ids.

    The order of ``question_ids`` is the order questions are presented in;
    shuffling, if wanted, is the caller's job.
    """
    session = TestSession(
        id=generate_id("ts"),
        source=QuestionSource(source),
        question_ids=tuple(question_ids),
        answers_by_question={},
        current_index=0,
        started_at=now or _utcnow(),
        finished_at=None,
    )
    get_session_logger(session.id).info(f"Started session with {session.total} questions")
    return session


def record_answer(session: TestSession, question_id: str, raw_text: str) -> TestSession:
    """Store the raw answer text for a question, overwriting any previous one."""
    if session.is_finished:
        logger.debug(f"Ignoring answer for finished session {session.id}")
        return session

    answers = dict(session.answers_by_question)
    answers[question_id] = raw_text
    return replace(session, answers_by_question=answers)


def _persist_draft(session: TestSession, draft: Optional[str]) -> TestSession:
    question_id = session.current_question_id
    if draft is None or question_id is None:
        return session
    return record_answer(session, question_id, draft)


def navigate(session: TestSession, target_index: int, draft: Optional[str] = None) -> TestSession:
    """
    Move to another question.

    The draft for the current question is saved first (when given), then the
    target index is clamped to the valid range.
    """
    session = _persist_draft(session, draft)
    return replace(session, current_index=_clamp_index(target_index, session.total))


def next_question(session: TestSession, draft: Optional[str] = None) -> TestSession:
    return navigate(session, session.current_index + 1, draft)


def previous_question(session: TestSession, draft: Optional[str] = None) -> TestSession:
    return navigate(session, session.current_index - 1, draft)


def finish_session(session: TestSession, final_draft: Optional[str] = None,
                   now: Optional[datetime] = None) -> TestSession:
    """
    Finish the session, saving the draft for the current question first.

    Finishing is one-way: a finished session is returned unchanged.
    """
    if session.is_finished:
        return session

    session = _persist_draft(session, final_draft)
    finished = replace(session, finished_at=now or _utcnow())
    get_session_logger(finished.id).info(
        f"Finished session: {len(finished.answers_by_question)}/{finished.total} answers recorded"
    )
    return finished


def retake_session(session: TestSession, now: Optional[datetime] = None) -> TestSession:
    """Start a fresh session over the same questions in the same order."""
    return start_session(session.question_ids, source=session.source, now=now)


def resolve_current_question(session: TestSession,
                             index: Mapping[str, Question]) -> Optional[Question]:
    """The current question, or None when it is no longer in the bank."""
    question_id = session.current_question_id
    if question_id is None:
        return None
    return index.get(question_id)


def missing_question_ids(session: TestSession, index: Mapping[str, Question]) -> Tuple[str, ...]:
    """Session question ids that no longer resolve in the bank."""
    return tuple(qid for qid in session.question_ids if qid not in index)
