"""
Tests for similarity signals.
"""

import pytest
from cupnote.similarity import (
    context_bonus,
    levenshtein_distance,
    phonetic_similarity,
    string_similarity,
    substring_match,
)


class TestStringSimilarity:
    """Test edit-distance similarity."""

    def test_levenshtein_classic(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "abc") == 0

    def test_normalized_similarity(self):
        assert string_similarity("kitten", "sitting") == pytest.approx(4 / 7)

    def test_identical_after_normalization(self):
        """Case and surrounding whitespace are ignored."""
        assert string_similarity("Caramel", "  caramel ") == 1.0

    def test_empty_strings_score_zero(self):
        assert string_similarity("", "a") == 0.0
        assert string_similarity("a", "") == 0.0
        assert string_similarity("", "") == 0.0
        assert string_similarity("   ", "   ") == 0.0

    def test_symmetric(self):
        pairs = [("berry", "cherry"), ("초콜릿", "쵸콜렛"), ("a", "abc")]
        for a, b in pairs:
            assert string_similarity(a, b) == string_similarity(b, a)


class TestPhoneticSimilarity:
    """Test jamo-level similarity."""

    def test_sound_alike_korean_scores_higher_than_syllables(self):
        """카라멜 / 캐러멜 differ in two syllables but only two jamo."""
        assert string_similarity("카라멜", "캐러멜") == pytest.approx(1 / 3)
        assert phonetic_similarity("카라멜", "캐러멜") == pytest.approx(5 / 7)

    def test_latin_matches_string_similarity(self):
        assert phonetic_similarity("berry", "cherry") == pytest.approx(string_similarity("berry", "cherry"))

    def test_empty(self):
        assert phonetic_similarity("", "가") == 0.0


class TestSubstringMatch:
    """Test containment scoring."""

    def test_target_contains_query(self):
        assert substring_match("chocolate", "choc") == pytest.approx(4 / 9 + 0.5)

    def test_query_contains_target(self):
        assert substring_match("choc", "chocolate") == pytest.approx(4 / 9 + 0.3)

    def test_capped_at_one(self):
        assert substring_match("berry", "berry") == 1.0
        assert substring_match("dark chocolate", "chocolate") == 1.0

    def test_no_overlap(self):
        assert substring_match("berry", "nutty") == 0.0

    def test_empty(self):
        assert substring_match("", "berry") == 0.0
        assert substring_match("berry", "") == 0.0


class TestContextBonus:
    """Test roaster-note co-occurrence bonus."""

    def test_same_sentence_and_proximity(self):
        """+0.2 sentence, words 2 apart add 0.15 * 1/3."""
        note = "Notes of chocolate and caramel. Bright finish."
        assert context_bonus("chocolate", "caramel", note) == pytest.approx(0.25)

    def test_capped(self):
        note = "Chocolate caramel. Chocolate caramel."
        assert context_bonus("chocolate", "caramel", note) == pytest.approx(0.3)

    def test_different_sentences_far_apart(self):
        note = "Chocolate up front. Later on we get some caramel."
        assert context_bonus("chocolate", "caramel", note) == 0.0

    def test_proximity_across_sentence_boundary(self):
        """Adjacent words in different sentences still earn proximity."""
        note = "Chocolate. Caramel"
        assert context_bonus("chocolate", "caramel", note) == pytest.approx(0.1)

    def test_missing_note(self):
        assert context_bonus("chocolate", "caramel", "") == 0.0
        assert context_bonus("chocolate", "caramel", "   ") == 0.0

    def test_missing_token(self):
        assert context_bonus("", "caramel", "caramel") == 0.0
