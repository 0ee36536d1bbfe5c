"""
Tests for token normalization and score rounding.
"""

from cupnote.normalize import (
    clamp_score,
    clamp_unit,
    normalize_text,
    normalize_token,
    normalize_tokens,
    round_half_up,
)


class TestNormalize:
    """Test string normalization."""

    def test_token(self):
        assert normalize_token("  Dark Chocolate ") == "dark chocolate"

    def test_text_collapses_whitespace(self):
        assert normalize_text("  Dark \n chocolate\tand  caramel ") == "dark chocolate and caramel"

    def test_tokens_drop_blanks_and_non_strings(self):
        assert normalize_tokens([" Berry", "", "  ", None, 3, "초콜릿"]) == ["berry", "초콜릿"]

    def test_tokens_none(self):
        assert normalize_tokens(None) == []


class TestRounding:
    """Test half-up rounding and clamping."""

    def test_half_up(self):
        assert round_half_up(87.5) == 88
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2

    def test_clamp_score(self):
        assert clamp_score(104.5) == 100
        assert clamp_score(-3) == 0
        assert clamp_score(33.333) == 33
        assert isinstance(clamp_score(50.0), int)

    def test_clamp_unit(self):
        assert clamp_unit(1.2) == 1.0
        assert clamp_unit(-0.1) == 0.0
        assert clamp_unit(0.4) == 0.4
