"""
Answer Normalization

Canonicalizes free-text answers so comparisons ignore case, accents,
punctuation and spacing. No attempt is made at semantic understanding.
"""

import re
import unicodedata
from typing import Optional

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """Decompose accented letters and drop the nonspacing marks (category Mn)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize_answer(raw: Optional[str]) -> str:
    """
    Normalize text for tolerant comparison.

    Steps: trim, lowercase, strip diacritics, turn every character other than
    ``a-z``, ``0-9`` and whitespace into a space, collapse whitespace, trim.
    The result only contains ``[a-z0-9 ]``, so the function is idempotent.

    >>> normalize_answer("  Café, au LAIT! ")
    'cafe au lait'
    """
    if not raw:
        return ""

    text = raw.strip().lower()
    text = strip_diacritics(text)
    text = _NON_ALPHANUMERIC.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()
