"""
Unit tests for edit distance and similarity scoring.
"""

import pytest

from quizdrill.evaluation.similarity import levenshtein_distance, round_percent, similarity_percent


class TestLevenshteinDistance:
    """Test cases for levenshtein_distance."""

    @pytest.mark.parametrize("a,b,expected", [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("paris", "pariss", 1),
        ("same", "same", 0),
        ("", "abc", 3),
        ("abc", "", 3),
        ("", "", 0),
        ("abc", "xyz", 3),
    ])
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self):
        assert levenshtein_distance("shakespeare", "william shakespeare") == \
            levenshtein_distance("william shakespeare", "shakespeare")


class TestRoundPercent:
    """Half-up rounding of percentages."""

    @pytest.mark.parametrize("value,expected", [
        (87.5, 88),
        (0.5, 1),
        (2.5, 3),
        (66.666, 67),
        (83.333, 83),
        (0.0, 0),
        (100.0, 100),
    ])
    def test_rounds_half_up(self, value, expected):
        assert round_percent(value) == expected


class TestSimilarityPercent:
    """Test cases for similarity_percent."""

    @pytest.mark.parametrize("text", ["", "a", "paris", "william shakespeare"])
    def test_reflexive(self, text):
        assert similarity_percent(text, text) == 100

    @pytest.mark.parametrize("a,b", [
        ("paris", "pariss"),
        ("kitten", "sitting"),
        ("", "abc"),
        ("jupiter", "saturn"),
    ])
    def test_symmetric_and_bounded(self, a, b):
        forward = similarity_percent(a, b)
        assert forward == similarity_percent(b, a)
        assert 0 <= forward <= 100

    def test_known_values(self):
        assert similarity_percent("pariss", "paris") == 83
        assert similarity_percent("kitten", "sitting") == 57
        assert similarity_percent("abcde", "abcdx") == 80

    def test_completely_different(self):
        assert similarity_percent("abc", "xyz") == 0
        assert similarity_percent("", "abc") == 0
