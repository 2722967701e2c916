"""
Answer Evaluation

Classifies a single free-text answer as correct, incorrect or unanswered
by comparing normalized text with an edit-distance similarity threshold.

This is not a semantic judgment: "Paris" and "capital of France" are
simply different strings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .normalizer import normalize_answer
from .similarity import similarity_percent
from ..core.exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 80


class AnswerStatus(str, Enum):
    """Outcome of evaluating one answer."""
    CORRECT = "CORRECT"
    INCORRECT = "INCORRECT"
    UNANSWERED = "UNANSWERED"


@dataclass(frozen=True)
class AnswerEvaluationResult:
    """Result of evaluating one answer against its expected answer."""
    status: AnswerStatus
    similarity: int  # 0..100
    normalized_user_answer: str
    normalized_expected_answer: str

    @property
    def is_correct(self) -> bool:
        return self.status == AnswerStatus.CORRECT

    @property
    def is_answered(self) -> bool:
        return self.status != AnswerStatus.UNANSWERED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "similarity": self.similarity,
            "normalizedUserAnswer": self.normalized_user_answer,
            "normalizedExpectedAnswer": self.normalized_expected_answer,
        }


def evaluate_answer(user_answer_raw: Optional[str],
                    expected_answer_raw: Optional[str],
                    threshold_percent: int = DEFAULT_SIMILARITY_THRESHOLD) -> AnswerEvaluationResult:
    """
    Compare a user's answer with the expected answer.

    An answer that normalizes to nothing is UNANSWERED and is never scored.
    Otherwise the answer is CORRECT when its similarity is at least
    ``threshold_percent``.
    """
    normalized_user = normalize_answer(user_answer_raw)
    normalized_expected = normalize_answer(expected_answer_raw)

    if not normalized_user:
        return AnswerEvaluationResult(
            status=AnswerStatus.UNANSWERED,
            similarity=0,
            normalized_user_answer=normalized_user,
            normalized_expected_answer=normalized_expected,
        )

    similarity = similarity_percent(normalized_user, normalized_expected)
    status = AnswerStatus.CORRECT if similarity >= threshold_percent else AnswerStatus.INCORRECT

    return AnswerEvaluationResult(
        status=status,
        similarity=similarity,
        normalized_user_answer=normalized_user,
        normalized_expected_answer=normalized_expected,
    )


class AnswerEvaluator:
    """Evaluates answers against a fixed similarity threshold."""

    def __init__(self, threshold_percent: Optional[int] = None):
        """
        Initialize the evaluator.

        Args:
            threshold_percent: Minimum similarity (0-100) for a correct answer.
                Defaults to ``evaluation.similarity_threshold_percent`` from
                the application configuration.
        """
        if threshold_percent is None:
            from ..core.config import get_config
            threshold_percent = get_config().evaluation.similarity_threshold_percent

        if isinstance(threshold_percent, bool) or not isinstance(threshold_percent, int) \
                or not 0 <= threshold_percent <= 100:
            raise ConfigurationError(
                f"Similarity threshold must be an integer between 0 and 100, got {threshold_percent!r}"
            )

        self.threshold_percent = threshold_percent

    def evaluate(self, user_answer_raw: Optional[str],
                 expected_answer_raw: Optional[str]) -> AnswerEvaluationResult:
        return evaluate_answer(user_answer_raw, expected_answer_raw, self.threshold_percent)

    def evaluate_batch(self, answers: List[Optional[str]],
                       expected: List[Optional[str]]) -> List[AnswerEvaluationResult]:
        """Evaluate answers pairwise against expected answers."""
        if len(answers) != len(expected):
            raise ValueError("Answers and expected lists must have the same length")

        results = [self.evaluate(answer, expect) for answer, expect in zip(answers, expected)]
        logger.debug(
            f"Batch evaluation complete: {sum(1 for r in results if r.is_correct)}/{len(results)} correct"
        )
        return results
