"""
Session Results and KPIs

Joins a test session's answers with the question bank through the answer
evaluator and derives per-item results plus summary statistics
(counts, completion, accuracy and a per-tag breakdown).
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .evaluator import AnswerEvaluationResult, AnswerEvaluator, AnswerStatus
from .similarity import round_percent
from ..core.session import TestSession
from ..core.types import Question
from ..utils.logging import get_logger, PerformanceTimer

logger = get_logger(__name__)


def percentage(part: int, whole: int) -> int:
    """Integer percentage of part in whole, 0 when whole is 0."""
    if whole == 0:
        return 0
    return round_percent(100 * part / whole)


@dataclass(frozen=True)
class ItemResult:
    """Outcome for one question of a session, in presentation order."""
    position: int
    question_id: str
    question: Optional[Question]
    user_answer: str
    evaluation: Optional[AnswerEvaluationResult]

    @property
    def missing(self) -> bool:
        """The question is no longer in the bank."""
        return self.question is None

    @property
    def scorable(self) -> bool:
        return self.evaluation is not None

    @property
    def status(self) -> AnswerStatus:
        if self.evaluation is None:
            return AnswerStatus.UNANSWERED
        return self.evaluation.status

    @property
    def similarity(self) -> int:
        return self.evaluation.similarity if self.evaluation else 0

    def to_row(self) -> Dict[str, Any]:
        """Flat representation used for tabular export."""
        return {
            "position": self.position + 1,
            "question_id": self.question_id,
            "prompt": self.question.prompt if self.question else "",
            "expected_answer": (self.question.expected_answer or "") if self.question else "",
            "user_answer": self.user_answer,
            "status": self.status.value,
            "similarity": self.similarity,
            "missing": self.missing,
            "tags": ", ".join(self.question.tags or []) if self.question else "",
        }


@dataclass(frozen=True)
class TagBreakdown:
    """Counts for the items carrying one tag."""
    total: int
    answered: int
    correct: int

    @property
    def accuracy_percent(self) -> int:
        return percentage(self.correct, self.answered)


@dataclass(frozen=True)
class SessionResults:
    """Per-item results and KPIs for one session."""
    session_id: str
    threshold_percent: int
    total: int
    answered: int
    unanswered: int
    correct: int
    incorrect: int
    missing: int
    completion_percent: int
    accuracy_percent: int
    items: Tuple[ItemResult, ...]
    started_at: datetime
    finished_at: Optional[datetime] = None
    by_tag: Dict[str, TagBreakdown] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def items_with_status(self, status: AnswerStatus) -> List[ItemResult]:
        return [item for item in self.items if item.status == status]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "thresholdPercent": self.threshold_percent,
            "total": self.total,
            "answered": self.answered,
            "unanswered": self.unanswered,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "missing": self.missing,
            "completionPercent": self.completion_percent,
            "accuracyPercent": self.accuracy_percent,
            "startedAtIso": self.started_at.isoformat(),
            "finishedAtIso": self.finished_at.isoformat() if self.finished_at else "",
            "durationSeconds": self.duration_seconds,
            "byTag": {
                tag: {
                    "total": breakdown.total,
                    "answered": breakdown.answered,
                    "correct": breakdown.correct,
                    "accuracyPercent": breakdown.accuracy_percent,
                }
                for tag, breakdown in self.by_tag.items()
            },
            "items": [item.to_row() for item in self.items],
        }


class ResultsAggregator:
    """Evaluates every answer of a session and derives its KPIs."""

    def __init__(self, evaluator: Optional[AnswerEvaluator] = None):
        self.evaluator = evaluator or AnswerEvaluator()

    def evaluate_item(self, position: int, question_id: str, session: TestSession,
                      bank: Mapping[str, Question]) -> ItemResult:
        question = bank.get(question_id)
        user_answer = session.answer_for(question_id)

        if question is None or not question.is_scorable:
            # Cannot be scored; counted as unanswered
            return ItemResult(position, question_id, question, user_answer, None)

        evaluation = self.evaluator.evaluate(user_answer, question.expected_answer)
        return ItemResult(position, question_id, question, user_answer, evaluation)

    def aggregate(self, session: TestSession, bank: Mapping[str, Question]) -> SessionResults:
        """
        Build results for a session.

        Args:
            session: The (normally finished) session to score
            bank: Question index keyed by id, built once for this pass

        Returns:
            SessionResults with items in the session's question order
        """
        with PerformanceTimer(f"aggregating session {session.id}", logger):
            items = tuple(
                self.evaluate_item(position, question_id, session, bank)
                for position, question_id in enumerate(session.question_ids)
            )

            total = len(items)
            correct = sum(1 for item in items if item.status == AnswerStatus.CORRECT)
            incorrect = sum(1 for item in items if item.status == AnswerStatus.INCORRECT)
            answered = correct + incorrect

            results = SessionResults(
                session_id=session.id,
                threshold_percent=self.evaluator.threshold_percent,
                total=total,
                answered=answered,
                unanswered=total - answered,
                correct=correct,
                incorrect=incorrect,
                missing=sum(1 for item in items if item.missing),
                completion_percent=percentage(answered, total),
                accuracy_percent=percentage(correct, answered),
                items=items,
                started_at=session.started_at,
                finished_at=session.finished_at,
                by_tag=self._breakdown_by_tag(items),
            )

        logger.info(
            f"Session {session.id}: {correct}/{answered} correct, "
            f"{answered}/{total} answered, {results.missing} missing"
        )
        return results

    def _breakdown_by_tag(self, items: Tuple[ItemResult, ...]) -> Dict[str, TagBreakdown]:
        counts: Dict[str, List[int]] = defaultdict(lambda: [0, 0, 0])

        for item in items:
            if item.question is None or not item.question.tags:
                continue
            for tag in item.question.tags:
                counts[tag][0] += 1
                if item.status != AnswerStatus.UNANSWERED:
                    counts[tag][1] += 1
                if item.status == AnswerStatus.CORRECT:
                    counts[tag][2] += 1

        return {
            tag: TagBreakdown(total=total, answered=answered, correct=correct)
            for tag, (total, answered, correct) in sorted(counts.items())
        }


def aggregate_session(session: TestSession, bank: Mapping[str, Question],
                      threshold_percent: Optional[int] = None) -> SessionResults:
    """Convenience wrapper around ResultsAggregator."""
    return ResultsAggregator(AnswerEvaluator(threshold_percent)).aggregate(session, bank)
