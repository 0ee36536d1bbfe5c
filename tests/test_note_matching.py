"""
Tests for roaster-note profile matching.
"""

import pytest
from cupnote.note_matching import (
    FLAVOR,
    NEUTRAL_SCORE,
    SENSORY,
    calculate_note_match_score,
    extract_flavor_keywords,
    extract_sensory_keywords,
    generate_score_message,
    match_note_terms,
)


class TestExtractKeywords:
    """Test keyword extraction from free text."""

    def test_flavor_keywords_ordered_by_confidence(self):
        note = "Jasmine, citrus and chocolate"
        assert extract_flavor_keywords(note) == ["citrus", "chocolate", "jasmine"]

    def test_korean_primary_term(self):
        assert extract_flavor_keywords("다크초콜릿 느낌") == ["chocolate"]

    def test_sensory_keywords(self):
        assert extract_sensory_keywords("Bright and clean, dark chocolate") == ["bright", "clean", "dark"]

    def test_empty_note(self):
        assert extract_flavor_keywords("") == []
        assert extract_sensory_keywords("   ") == []


class TestMatchNoteTerms:
    """Test tiered crediting."""

    def test_primary_tier(self):
        """1.0 * intensity 1.1 * confidence 0.95 caps at 100, plus bonus."""
        result = match_note_terms(["초콜릿"], "Dark chocolate", FLAVOR)
        assert result.score == 100
        assert result.matched == ["초콜릿"]
        assert result.details[0].tier == "primary"

    def test_related_tier(self):
        """0.8 * 1.1 * 0.95 = 0.836 -> 83.6 + 2 bonus."""
        result = match_note_terms(["코코아"], "chocolate", FLAVOR)
        assert result.score == 86
        assert result.details[0].tier == "related"

    def test_opposite_tier_penalizes(self):
        result = match_note_terms(["상큼한"], "dark chocolate", FLAVOR)
        assert result.score == 2
        assert result.matched == []
        assert result.details[0].tier == "opposite"

    def test_tier_claim_runs_before_fuzzy(self):
        """Higher-confidence chocolate takes 캐러멜 from its similar tier first."""
        result = match_note_terms(["캐러멜"], "chocolate and caramel", FLAVOR)
        assert [(d.keyword, d.tier) for d in result.details] == [("chocolate", "similar")]

    def test_fuzzy_fallback(self):
        """carmel / caramel: half of the fuzzy similarity."""
        result = match_note_terms(["carmel"], "caramel", FLAVOR)
        credit = result.details[0]
        assert credit.tier == "fuzzy"
        assert credit.fuzzy is not None
        assert credit.points == pytest.approx(0.8 * 6 / 7 * 0.5)
        assert result.score == 36

    def test_no_keywords_is_neutral(self):
        result = match_note_terms(["초콜릿"], "a quiet cup", FLAVOR)
        assert result.score == NEUTRAL_SCORE
        assert result.details == []

    def test_nothing_credited_is_neutral_plus_bonus(self):
        result = match_note_terms(["xyz"], "chocolate", FLAVOR)
        assert result.score == NEUTRAL_SCORE + 2
        assert result.matched == []

    def test_term_credited_once(self):
        result = match_note_terms(["초콜릿"], "chocolate and caramel", FLAVOR)
        assert [d.keyword for d in result.details] == ["chocolate"]
        assert result.matched == ["초콜릿"]

    def test_sensory_kind(self):
        """0.8 * (0.9 + 0.4) * 0.9 = 0.936 -> 93.6 + 1.5 bonus."""
        result = match_note_terms(["톡쏘는"], "bright and clean", SENSORY)
        assert result.score == 95
        assert result.matched == ["톡쏘는"]


class TestCalculateNoteMatchScore:
    """Test the blended note score."""

    def test_blend(self):
        result = calculate_note_match_score(["초콜릿"], ["톡쏘는"], "Bright and clean, dark chocolate")
        assert result.flavor_score == 100
        assert result.sensory_score == 95
        assert result.final_score == 99  # 70 + 28.5
        assert result.confidence == pytest.approx((0.95 + 0.9) / 2)
        assert result.matched_flavors == ["초콜릿"]
        assert result.matched_sensory == ["톡쏘는"]
        assert result.message.startswith("🎯")

    def test_empty_note(self):
        result = calculate_note_match_score(["초콜릿"], [], "")
        assert result.final_score == NEUTRAL_SCORE
        assert result.confidence == 0.5
        assert result.roaster_note == ""


class TestScoreMessage:
    """Test message tiers."""

    @pytest.mark.parametrize("score,prefix", [
        (95, "🎯"),
        (85, "⭐"),
        (75, "👍"),
        (65, "🤔"),
        (55, "🎨"),
        (10, "🌟"),
    ])
    def test_tiers(self, score, prefix):
        assert generate_score_message(score, 1, 0.9).startswith(prefix)

    def test_confidence_wording(self):
        assert "low confidence" in generate_score_message(95, 2, 0.3)
