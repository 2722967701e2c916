"""
Keyword Review

Extracts study keywords from expected answers and builds search links for
them, so missed questions can be followed up after a session.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote

from .evaluator import AnswerStatus
from .normalizer import normalize_answer

# Common English stop words, kept small on purpose
STOP_WORDS = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her",
    "she", "or", "an", "will", "my", "one", "all", "would", "there",
    "their", "what", "so", "up", "out", "if", "about", "who", "get",
    "which", "go", "me", "when", "make", "can", "like", "time", "no",
    "just", "him", "know", "take", "people", "into", "year", "your",
    "good", "some", "could", "them", "see", "other", "than", "then",
    "now", "look", "only", "come", "its", "over", "think", "also",
    "back", "after", "use", "two", "how", "our", "work", "first",
    "well", "way", "even", "new", "want", "because", "any", "these",
    "give", "day", "most", "us", "is", "are", "was", "were", "has", "had",
})

# Characters left unescaped, matching JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class SearchLinks:
    """External search URLs for one keyword."""
    google: str
    wikipedia: str
    youtube: str

    def to_dict(self) -> Dict[str, str]:
        return {"google": self.google, "wikipedia": self.wikipedia, "youtube": self.youtube}


def extract_keywords(text: Optional[str], min_length: int = 3) -> List[str]:
    """Unique non-stop-words of at least ``min_length`` characters, in order."""
    if not text:
        return []

    keywords: List[str] = []
    for word in normalize_answer(text).split(" "):
        if len(word) < min_length or word in STOP_WORDS:
            continue
        if word not in keywords:
            keywords.append(word)
    return keywords


def generate_search_links(keyword: str) -> SearchLinks:
    encoded = quote(keyword, safe=_URI_COMPONENT_SAFE)
    return SearchLinks(
        google=f"https://www.google.com/search?q={encoded}",
        wikipedia=f"https://en.wikipedia.org/wiki/Special:Search?search={encoded}",
        youtube=f"https://www.youtube.com/results?search_query={encoded}",
    )


def review_keywords(results, min_length: int = 3) -> List[str]:
    """
    Keywords from the expected answers of every item that was not answered
    correctly (incorrect, blank or unscorable), deduplicated across items.
    """
    keywords: List[str] = []
    for item in results.items:
        if item.status == AnswerStatus.CORRECT or item.question is None:
            continue
        for keyword in extract_keywords(item.question.expected_answer, min_length):
            if keyword not in keywords:
                keywords.append(keyword)
    return keywords
