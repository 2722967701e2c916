"""
Evaluation Module

Answer normalization, edit-distance similarity, threshold-based answer
evaluation and session KPI aggregation.
"""

from .normalizer import normalize_answer
from .similarity import levenshtein_distance, similarity_percent, round_percent
from .evaluator import (
    AnswerStatus,
    AnswerEvaluationResult,
    AnswerEvaluator,
    evaluate_answer,
    DEFAULT_SIMILARITY_THRESHOLD,
)
from .metrics import ResultsAggregator, SessionResults, ItemResult, aggregate_session
from .keywords import extract_keywords, generate_search_links, review_keywords

__all__ = [
    "normalize_answer",
    "levenshtein_distance",
    "similarity_percent",
    "round_percent",
    "AnswerStatus",
    "AnswerEvaluationResult",
    "AnswerEvaluator",
    "evaluate_answer",
    "DEFAULT_SIMILARITY_THRESHOLD",
    "ResultsAggregator",
    "SessionResults",
    "ItemResult",
    "aggregate_session",
    "extract_keywords",
    "generate_search_links",
    "review_keywords",
]
